"""Pydantic models for editor-session state exposed to the UI."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class LatLng(BaseModel):
    lat: float
    lng: float


class MapView(BaseModel):
    center: LatLng
    zoom: float


class NotificationLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


class Notification(BaseModel):
    """A transient message for the user (rendered as a toast by the frontend)."""

    message: str
    level: NotificationLevel = NotificationLevel.SUCCESS
    created_at: datetime = Field(default_factory=datetime.now)
