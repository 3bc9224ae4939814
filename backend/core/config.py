import os

from dotenv import load_dotenv

# Load environment variables from .env file
# Load .env.local first (for local development), then .env (fallback)
load_dotenv(".env.local", override=True)  # Local development overrides
load_dotenv()  # Load .env if exists (won't override existing vars)
# General config in a central place


def _env_bool(name: str, default: str = "false") -> bool:
    """Parse a boolean-like environment variable.

    Accepts a broad set of truthy values to be user-friendly.
    """
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on", "y"}


# Base style

# Remote style document loaded at session start and on reset
BASE_STYLE_URL = os.getenv(
    "BASE_STYLE_URL",
    "https://cdn.shopify.com/s/files/1/0977/3672/0709/files/beachglass.json",
)
# Load the base style when the API process starts (disable for offline work)
LOAD_STYLE_ON_STARTUP = _env_bool("LOAD_STYLE_ON_STARTUP", default="true")

# Name used for exports when the user leaves the style name blank
DEFAULT_STYLE_NAME = os.getenv("DEFAULT_STYLE_NAME", "custom-style")

# Network timeout (seconds) for style fetches and geocoding
HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", "10"))


# Geocoding

MAPBOX_ACCESS_TOKEN = os.getenv("MAPBOX_ACCESS_TOKEN", "")
GEOCODING_URL = os.getenv(
    "GEOCODING_URL", "https://api.mapbox.com/geocoding/v5/mapbox.places"
)
GEOCODING_LIMIT = int(os.getenv("GEOCODING_LIMIT", "5"))


# Map view

# Initial center (Miami) and zoom; reset_view returns here
DEFAULT_CENTER_LAT = float(os.getenv("DEFAULT_CENTER_LAT", "25.773357"))
DEFAULT_CENTER_LNG = float(os.getenv("DEFAULT_CENTER_LNG", "-80.1919"))
DEFAULT_ZOOM = float(os.getenv("DEFAULT_ZOOM", "12"))
# Zoom level used when flying to a search result
SEARCH_RESULT_ZOOM = float(os.getenv("SEARCH_RESULT_ZOOM", "12"))


# Session

# Number of notifications kept in the session history
NOTIFICATION_HISTORY = int(os.getenv("NOTIFICATION_HISTORY", "50"))

# CORS configuration
# Comma-separated list of allowed origins; if empty, allow all (not recommended with credentials)
RAW_ALLOWED_ORIGINS = os.getenv("ALLOWED_CORS_ORIGINS", "")
ALLOWED_CORS_ORIGINS = [o.strip() for o in RAW_ALLOWED_ORIGINS.split(",") if o.strip()]
