"""Fetching the base style document over HTTP."""

import logging

import requests
from pydantic import ValidationError

from core.config import HTTP_TIMEOUT_SECONDS
from models.style import StyleDocument

logger = logging.getLogger(__name__)

headers_style_editor = {"User-Agent": "map-style-editor (style document fetch)"}


class StyleFetchError(Exception):
    """The base style could not be downloaded or is not a style document."""


def fetch_style(url: str, timeout: float = HTTP_TIMEOUT_SECONDS) -> StyleDocument:
    """
    Download and parse a style document.

    Raises:
        StyleFetchError: on network errors, non-200 responses, invalid JSON or a JSON
            body that is not a style (e.g. layers without ids).
    """
    try:
        response = requests.get(url, headers=headers_style_editor, timeout=timeout)
    except requests.RequestException as e:
        logger.error(f"Failed to fetch style from {url}: {e}")
        raise StyleFetchError(f"Could not reach style server: {e}") from e

    if response.status_code != 200:
        logger.error(f"Style fetch from {url} returned HTTP {response.status_code}")
        raise StyleFetchError(f"Style server returned HTTP {response.status_code}")

    try:
        return StyleDocument.model_validate(response.json())
    except ValidationError as e:
        raise StyleFetchError(f"Response is not a valid style document: {e}") from e
    except ValueError as e:
        raise StyleFetchError(f"Response is not valid JSON: {e}") from e
