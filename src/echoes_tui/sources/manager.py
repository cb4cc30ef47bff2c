from __future__ import annotations

from typing import Any, Dict, Optional

from ..config import DEFAULT_STORIES_URL, HTTP_TIMEOUT
from .base import StorySource
from .local import FileSource
from .remote import RemoteSource


def get_source(
    config: Dict[str, Any], url: Optional[str] = None, path: Optional[str] = None
) -> StorySource:
    """Pick the startup source: an explicit file wins over a URL, which wins over config."""
    if path:
        return FileSource(path)
    return RemoteSource(
        url or config.get("stories_url", DEFAULT_STORIES_URL),
        timeout=config.get("http_timeout", HTTP_TIMEOUT),
    )
