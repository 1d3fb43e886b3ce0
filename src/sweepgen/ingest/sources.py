"""Byte sources that abstract where raw config/data files come from."""

from __future__ import annotations

import base64
import logging
from pathlib import Path
from typing import Callable, Optional

import httpx

from sweepgen.errors import SourceError


logger = logging.getLogger(__name__)

BytesSource = Callable[[], bytes]

DEFAULT_TIMEOUT_SECONDS = 10.0
JSON_CONTENT_TYPE = "application/json"


def bytes_from_file(path: Path | str) -> BytesSource:
    """Return a source that reads the file at ``path`` on each call."""

    file_path = Path(path)

    def _read() -> bytes:
        try:
            return file_path.read_bytes()
        except OSError as exc:
            raise SourceError(f"cannot read file '{file_path}': {exc}") from exc

    return _read


def bytes_from_url(
    url: str,
    basic_auth: str = "",
    client: Optional[httpx.Client] = None,
    *,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> BytesSource:
    """Return a source that GETs ``url`` and yields its JSON body.

    ``basic_auth`` is an optional ``user:password`` pair sent as an HTTP basic
    Authorization header. When ``client`` is omitted a short-lived
    :class:`httpx.Client` is created per call.
    """

    headers = {}
    if basic_auth:
        token = base64.b64encode(basic_auth.encode("utf-8")).decode("ascii")
        headers["Authorization"] = f"Basic {token}"

    def _fetch(http: httpx.Client) -> bytes:
        try:
            resp = http.get(url, headers=headers)
        except httpx.HTTPError as exc:
            raise SourceError(f"cannot perform request: {exc}") from exc

        if resp.status_code != httpx.codes.OK:
            raise SourceError(f"non-200 status code: {resp.status_code}")

        content_type = resp.headers.get("content-type", "")
        if content_type.split(";", 1)[0].strip().lower() != JSON_CONTENT_TYPE:
            raise SourceError(f"invalid response content type: {content_type}")

        logger.debug("Fetched %d bytes from %s", len(resp.content), url)
        return resp.content

    def _read() -> bytes:
        if client is not None:
            return _fetch(client)
        with httpx.Client(timeout=timeout) as http:
            return _fetch(http)

    return _read


__all__ = [
    "BytesSource",
    "bytes_from_file",
    "bytes_from_url",
]
