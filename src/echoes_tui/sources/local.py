from __future__ import annotations

import logging
import os

from ..datamodels import StoryCollection
from ..errors import UPLOAD_FAILED_MESSAGE, InvalidFormat
from .base import StorySource, parse_document

logger = logging.getLogger("echoes")


class FileSource(StorySource):
    """A stories document picked from the local filesystem."""

    def __init__(self, path: str):
        self.path = os.path.expanduser(path)

    @property
    def label(self) -> str:
        return f"Custom file: {os.path.basename(self.path)}"

    def load(self) -> StoryCollection:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read %s: %s", self.path, e)
            raise InvalidFormat(f"Could not read {self.path}: {e}") from e

        collection = parse_document(
            text, shape_error=InvalidFormat, user_message=UPLOAD_FAILED_MESSAGE
        )
        logger.info("Loaded %d stories from %s", len(collection), self.path)
        return collection
