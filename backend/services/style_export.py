"""Serializing the edited style for download."""

import json
import logging
from typing import Tuple

from core.config import DEFAULT_STYLE_NAME
from models.style import StyleDocument
from utility.string_methods import json_file_name

logger = logging.getLogger(__name__)


def export_style(document: StyleDocument, style_name: str) -> Tuple[str, str]:
    """
    Render ``document`` as indented JSON under ``style_name``.

    Sets ``document.name`` to the chosen name as a side effect, so the name also shows
    up in later exports and in the live document.

    Returns:
        ``(file_name, json_text)``; the file name always ends in ``.json``.
    """
    name = (style_name or "").strip() or DEFAULT_STYLE_NAME
    document.name = name
    file_name = json_file_name(name)
    text = json.dumps(document.to_style_json(), indent=2, ensure_ascii=False)
    logger.info(f"Exported style {name!r} as {file_name} ({len(document.layers)} layers)")
    return file_name, text
