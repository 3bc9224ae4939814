import re


def json_file_name(name: str) -> str:
    """Append ``.json`` unless the name already ends with it."""
    return name if name.endswith(".json") else f"{name}.json"


def header_safe_filename(name: str) -> str:
    """Replace characters that would break a quoted Content-Disposition filename"""
    cleaned = re.sub(r"[^A-Za-z0-9._ -]+", "_", name.strip())
    return cleaned.strip("_") or "style.json"
