from __future__ import annotations

import logging

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..config import (
    HTTP_TIMEOUT,
    REQUEST_HEADERS,
    RETRY_BACKOFF,
    RETRY_STATUSES,
    RETRY_TOTAL,
)
from ..datamodels import StoryCollection
from ..errors import NetworkError
from .base import StorySource, parse_document

logger = logging.getLogger("echoes")


class RemoteSource(StorySource):
    """Stories served as a JSON document over HTTP."""

    def __init__(self, url: str, timeout: float = HTTP_TIMEOUT):
        self.url = url
        self.timeout = timeout
        self.session = self._create_session()

    def _create_session(self) -> requests.Session:
        s = requests.Session()
        s.headers.update(REQUEST_HEADERS)
        # transient failures only; the final response is checked below
        retries = Retry(
            total=RETRY_TOTAL,
            backoff_factor=RETRY_BACKOFF,
            status_forcelist=RETRY_STATUSES,
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retries)
        s.mount("https://", adapter)
        s.mount("http://", adapter)
        return s

    @property
    def label(self) -> str:
        return self.url

    def load(self) -> StoryCollection:
        logger.debug("Fetching %s", self.url)
        try:
            resp = self.session.get(self.url, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning("Fetch failed for %s: %s", self.url, e)
            raise NetworkError(f"Fetch failed for {self.url}: {e}") from e

        if not 200 <= resp.status_code < 300:
            logger.warning("Fetch of %s returned HTTP %d", self.url, resp.status_code)
            raise NetworkError(
                f"HTTP error! status: {resp.status_code}", status=resp.status_code
            )

        collection = parse_document(resp.content)
        logger.info("Loaded %d stories from %s", len(collection), self.url)
        return collection
