"""Shared API dependencies."""

import logging
from typing import Optional

from services.editor_session import EditorSession, default_map_view
from services.renderer import InMemoryRenderer

logger = logging.getLogger(__name__)

# One editing session per API process; the browser renders from GET /style
_editor_session: Optional[EditorSession] = None


def get_editor_session() -> EditorSession:
    """Return the process-wide editor session, creating it (without a style) on first use."""
    global _editor_session
    if _editor_session is None:
        logger.info("Creating editor session")
        _editor_session = EditorSession(renderer=InMemoryRenderer(default_map_view()))
    return _editor_session
