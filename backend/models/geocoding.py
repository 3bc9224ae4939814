from typing import List

from pydantic import BaseModel, Field


class PlaceResult(BaseModel):
    """A single ranked geocoding hit."""

    name: str = Field(..., description="Full display name, e.g. 'Paris, France'")
    text: str = Field(..., description="Short place name")
    center: List[float] = Field(..., description="[lng, lat]", min_length=2, max_length=2)
