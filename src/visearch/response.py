from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional, Tuple

import requests

from .errors import NetworkError, SystemError

logger = logging.getLogger(__name__)


@dataclass
class ResponseEnvelope:
    """Status, headers and unread body of one API call.

    The body holds a pooled connection until it is read or the envelope is
    closed; use it as a context manager or call ``read()``.
    """

    status_code: int
    headers: Dict[str, str]
    body: Any
    _response: Optional[requests.Response] = field(default=None, repr=False, compare=False)

    def read(self) -> bytes:
        """Consume the whole body and release the connection."""
        try:
            if self._response is not None:
                return self._response.content
            if self.body is None:
                return b""
            return self.body.read()
        except (requests.RequestException, OSError) as exc:
            raise NetworkError() from exc
        finally:
            self.close()

    def text(self, encoding: Optional[str] = None) -> str:
        content = self.read()
        encoding = encoding or (self._response.encoding if self._response is not None else None) or "utf-8"
        return content.decode(encoding, errors="replace")

    def close(self) -> None:
        if self._response is not None:
            self._response.close()
        elif self.body is not None and hasattr(self.body, "close"):
            self.body.close()

    def __enter__(self) -> "ResponseEnvelope":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def _header_items(response: requests.Response) -> Iterable[Tuple[str, str]]:
    raw = getattr(response, "raw", None)
    source = raw.headers if hasattr(raw, "headers") else response.headers
    if source is None:
        return ()
    # urllib3 yields repeated headers one pair at a time through iteritems()
    if hasattr(source, "iteritems"):
        return source.iteritems()
    return source.items()


def wrap_response(response: requests.Response) -> ResponseEnvelope:
    """Copy status and headers out of ``response``; leave the body unread.

    Raises:
        SystemError: header extraction failed; the response is closed first.
    """
    try:
        headers: Dict[str, str] = {}
        for name, value in _header_items(response):
            headers[name] = value
    except (ValueError, TypeError) as exc:
        logger.warning("Could not read headers of %s response: %s", response.status_code, exc)
        response.close()
        raise SystemError() from exc
    return ResponseEnvelope(
        status_code=response.status_code,
        headers=headers,
        body=response.raw,
        _response=response,
    )
