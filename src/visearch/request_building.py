from __future__ import annotations

import io
import re
from typing import IO, Iterable, List, Mapping, Optional, Sequence, Tuple, Union
from urllib.parse import urlencode

from requests import PreparedRequest, Request
from requests.exceptions import RequestException
from requests_toolbelt import MultipartEncoder
from urllib3.exceptions import LocationParseError
from urllib3.util import parse_url

from .errors import InvalidEndpointError, NetworkError

ParamValue = Union[str, int, float, Sequence[Union[str, int, float]]]
Params = Union[Mapping[str, ParamValue], Iterable[Tuple[str, ParamValue]]]

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded; charset=UTF-8"
TEXT_PART_CONTENT_TYPE = "text/plain; charset=UTF-8"
IMAGE_PART_CONTENT_TYPE = "application/octet-stream"
IMAGE_FIELD = "image"

_ALLOWED_SCHEMES = {"http", "https"}
_ILLEGAL_URI_CHARS = re.compile(r'[\s<>"{}|\\^`]')
_BROKEN_PERCENT_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def to_pairs(params: Optional[Params]) -> List[Tuple[str, str]]:
    """Flatten a parameter multimap into ordered ``(key, value)`` pairs.

    Accepts a mapping whose values are single values or lists of values, or an
    iterable of pairs. Repeated keys keep their relative order.
    """
    if params is None:
        return []
    items = params.items() if isinstance(params, Mapping) else params
    pairs: List[Tuple[str, str]] = []
    for key, value in items:
        if isinstance(value, (list, tuple)):
            pairs.extend((str(key), str(v)) for v in value)
        else:
            pairs.append((str(key), str(value)))
    return pairs


def check_url(url: str) -> str:
    """Return ``url`` unchanged if it is a well-formed absolute http(s) URI.

    Raises:
        InvalidEndpointError: with the parsing failure as its cause.
    """
    try:
        match = _ILLEGAL_URI_CHARS.search(url)
        if match:
            raise ValueError(f"Illegal character {match.group()!r} in URL {url!r}")
        if _BROKEN_PERCENT_ESCAPE.search(url):
            raise ValueError(f"Malformed percent-encoding in URL {url!r}")
        parsed = parse_url(url)
        if parsed.scheme not in _ALLOWED_SCHEMES:
            raise ValueError(f"Unsupported URL scheme {parsed.scheme!r} in {url!r}")
        if not parsed.host:
            raise ValueError(f"No host in URL {url!r}")
    except (LocationParseError, ValueError, TypeError) as exc:
        raise InvalidEndpointError() from exc
    return url


def _measurable(stream: IO[bytes]) -> IO[bytes]:
    """Return a stream whose size the encoder can compute without reading it.

    Pipes and read-only wrappers cannot be measured, so they are read once into memory.
    """
    try:
        if stream.seekable() and (hasattr(stream, "getvalue") or stream.fileno() >= 0):
            return stream
    except (AttributeError, OSError, ValueError):
        pass
    return io.BytesIO(stream.read())


def _prepare(request: Request) -> PreparedRequest:
    try:
        return request.prepare()
    except (RequestException, LocationParseError, ValueError) as exc:
        raise InvalidEndpointError() from exc


def build_get_request(url: str, params: Optional[Params] = None) -> PreparedRequest:
    return _prepare(Request("GET", check_url(url), params=to_pairs(params)))


def build_post_request(url: str, params: Optional[Params] = None) -> PreparedRequest:
    body = urlencode(to_pairs(params), encoding="utf-8").encode("utf-8")
    return _prepare(
        Request(
            "POST",
            check_url(url),
            data=body,
            headers={"Content-Type": FORM_CONTENT_TYPE},
        )
    )


def build_multipart_request(
    url: str,
    params: Optional[Params],
    stream: IO[bytes],
    filename: Optional[str],
) -> PreparedRequest:
    """Multipart POST: one text part per pair, then the ``image`` part.

    Seekable streams are read while the request is sent; others are buffered
    here. The stream is left open either way.
    """
    url = check_url(url)
    fields: list = [(key, (None, value, TEXT_PART_CONTENT_TYPE)) for key, value in to_pairs(params)]
    try:
        fields.append((IMAGE_FIELD, (filename, _measurable(stream), IMAGE_PART_CONTENT_TYPE)))
        encoder = MultipartEncoder(fields=fields, encoding="utf-8")
    except OSError as exc:
        raise NetworkError(f"Could not read image stream {filename!r}") from exc
    return _prepare(
        Request(
            "POST",
            url,
            data=encoder,
            headers={"Content-Type": encoder.content_type},
        )
    )
