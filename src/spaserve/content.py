"""Conditional content serving.

``serve_content`` turns a seekable byte source into a ``Response`` while
honouring the request's validators and byte ranges:

- ``If-Match`` / ``If-Unmodified-Since`` -> ``412 Precondition Failed``
- ``If-None-Match`` / ``If-Modified-Since`` -> ``304 Not Modified``
- ``Range`` (with ``If-Range``) -> ``206 Partial Content`` or ``416``

Entity tags are never computed here. A caller that wants tag-based
validation stages an ``ETag`` header and it is compared as given.

``serve_error`` is the single way an error response is built, both here
and in the router: it drops caching headers that were staged for a
successful payload.
"""

import io
import logging
import mimetypes
import secrets
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime
from email.utils import format_datetime, parsedate_to_datetime
from typing import BinaryIO

from spaserve.http.request import Request
from spaserve.http.response import Response
from spaserve.stores.protocol import AssetHandle

logger = logging.getLogger("spaserve.content")

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)

# Types the platform tables get wrong or miss for front-end builds.
mimetypes.add_type("text/javascript", ".js")
mimetypes.add_type("text/javascript", ".mjs")
mimetypes.add_type("text/css", ".css")
mimetypes.add_type("image/svg+xml", ".svg")
mimetypes.add_type("application/json", ".map")
mimetypes.add_type("application/manifest+json", ".webmanifest")
mimetypes.add_type("application/wasm", ".wasm")
mimetypes.add_type("font/woff2", ".woff2")

_UTF8_TYPES = frozenset({"application/javascript", "application/json"})

_ERROR_STRIPPED = ("Cache-Control", "Content-Encoding", "ETag", "Last-Modified")


def content_type_for(name: str) -> str:
    """Infer a Content-Type from *name*'s extension."""
    content_type, _ = mimetypes.guess_type(name, strict=False)
    if content_type is None:
        return "application/octet-stream"
    if content_type.startswith("text/") or content_type in _UTF8_TYPES:
        return f"{content_type}; charset=utf-8"
    return content_type


def http_date(moment: datetime) -> str:
    """Format *moment* as an IMF-fixdate (``Thu, 01 Jan 1970 00:00:00 GMT``)."""
    return format_datetime(moment.astimezone(UTC), usegmt=True)


def serve_error(
    status: int,
    text: str,
    *,
    headers: Iterable[tuple[str, str]] = (),
) -> Response:
    """Build a plain-text error response.

    *headers* are whatever had been staged for the successful response.
    ``Cache-Control``, ``Content-Encoding``, ``ETag`` and ``Last-Modified``
    are removed from them; the rest are kept.
    """
    staged = Response(headers=tuple(headers)).without_headers(*_ERROR_STRIPPED)
    return Response(
        body=f"{text}\n".encode(),
        status=status,
        content_type="text/plain; charset=utf-8",
        headers=staged.headers,
    )


def open_byte_source(handle: AssetHandle) -> BinaryIO:
    """Return a seekable stream over *handle*'s content.

    Uses the handle's own reader when it supports random access,
    otherwise reads it fully into memory.
    """
    reader = handle.reader()
    if reader.seekable():
        reader.seek(0)
        return reader
    data = reader.read()
    logger.debug("buffered %d bytes from a forward-only reader", len(data))
    return io.BytesIO(data)


# ------------------------------------------------------------------
# Validators
# ------------------------------------------------------------------


def _parse_http_date(value: str) -> datetime | None:
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _known(modified: datetime | None) -> bool:
    return modified is not None and modified != EPOCH


def _truncated(modified: datetime) -> datetime:
    return modified.replace(microsecond=0)


def _etags(value: str) -> list[str]:
    return [tag.strip() for tag in value.split(",") if tag.strip()]


def _strong_match(a: str, b: str) -> bool:
    return a == b and a != "" and not a.startswith("W/")


def _weak_match(a: str, b: str) -> bool:
    return a.removeprefix("W/") == b.removeprefix("W/")


def _if_match(request: Request, etag: str) -> bool | None:
    header = request.headers.get("if-match")
    if header is None:
        return None
    for candidate in _etags(header):
        if candidate == "*" or _strong_match(candidate, etag):
            return True
    return False


def _if_unmodified_since(request: Request, modified: datetime | None) -> bool | None:
    header = request.headers.get("if-unmodified-since")
    if not header or not _known(modified):
        return None
    since = _parse_http_date(header)
    if since is None:
        return None
    return _truncated(modified) <= since  # type: ignore[arg-type]


def _if_none_match(request: Request, etag: str) -> bool | None:
    header = request.headers.get("if-none-match")
    if header is None:
        return None
    for candidate in _etags(header):
        if candidate == "*" or (etag and _weak_match(candidate, etag)):
            return False
    return True


def _if_modified_since(request: Request, modified: datetime | None) -> bool | None:
    if request.method not in ("GET", "HEAD"):
        return None
    header = request.headers.get("if-modified-since")
    if not header or not _known(modified):
        return None
    since = _parse_http_date(header)
    if since is None:
        return None
    return _truncated(modified) > since  # type: ignore[arg-type]


def _if_range(request: Request, etag: str, modified: datetime | None) -> bool | None:
    if request.method not in ("GET", "HEAD"):
        return None
    header = request.headers.get("if-range")
    if not header:
        return None
    if header.startswith(('"', "W/")):
        return _strong_match(header, etag)
    if not _known(modified):
        return False
    since = _parse_http_date(header)
    return since is not None and _truncated(modified) == since  # type: ignore[arg-type]


# ------------------------------------------------------------------
# Ranges
# ------------------------------------------------------------------


class RangeNotSatisfiable(ValueError):
    """The Range header is malformed or selects no bytes."""

    def __init__(self, detail: str, *, no_overlap: bool = False) -> None:
        super().__init__(detail)
        self.no_overlap = no_overlap


@dataclass(frozen=True, slots=True)
class ByteRange:
    start: int
    length: int

    def content_range(self, size: int) -> str:
        return f"bytes {self.start}-{self.start + self.length - 1}/{size}"


def parse_range(header: str, size: int) -> list[ByteRange]:
    """Parse a ``Range`` header against a body of *size* bytes.

    Ranges past the end are dropped; if that leaves none,
    ``RangeNotSatisfiable(no_overlap=True)`` is raised.
    """
    if not header:
        return []
    unit, sep, byte_ranges = header.partition("=")
    if not sep or unit.strip() != "bytes":
        raise RangeNotSatisfiable("invalid range")

    ranges: list[ByteRange] = []
    no_overlap = False
    for item in byte_ranges.split(","):
        item = item.strip()
        if not item:
            continue
        first, sep, last = item.partition("-")
        if not sep:
            raise RangeNotSatisfiable("invalid range")
        first, last = first.strip(), last.strip()
        if not first:
            # Suffix range: the final N bytes.
            if not last.isdigit():
                raise RangeNotSatisfiable("invalid range")
            suffix = min(int(last), size)
            if suffix == 0:
                no_overlap = True
                continue
            ranges.append(ByteRange(size - suffix, suffix))
            continue
        if not first.isdigit():
            raise RangeNotSatisfiable("invalid range")
        start = int(first)
        if start >= size:
            no_overlap = True
            continue
        if not last:
            ranges.append(ByteRange(start, size - start))
            continue
        if not last.isdigit() or int(last) < start:
            raise RangeNotSatisfiable("invalid range")
        end = min(int(last), size - 1)
        ranges.append(ByteRange(start, end - start + 1))

    if no_overlap and not ranges:
        raise RangeNotSatisfiable("invalid range: failed to overlap", no_overlap=True)
    return ranges


def _multipart(
    source: BinaryIO, ranges: list[ByteRange], content_type: str, size: int
) -> tuple[bytes, str]:
    boundary = secrets.token_hex(16)
    parts: list[bytes] = []
    for index, byte_range in enumerate(ranges):
        source.seek(byte_range.start)
        separator = "\r\n" if index else ""
        head = (
            f"{separator}--{boundary}\r\n"
            f"Content-Range: {byte_range.content_range(size)}\r\n"
            f"Content-Type: {content_type}\r\n\r\n"
        )
        parts.append(head.encode("latin-1"))
        parts.append(source.read(byte_range.length))
    parts.append(f"\r\n--{boundary}--\r\n".encode("latin-1"))
    return b"".join(parts), f"multipart/byteranges; boundary={boundary}"


# ------------------------------------------------------------------
# Entry point
# ------------------------------------------------------------------


def serve_content(
    request: Request,
    name: str,
    modified: datetime | None,
    source: BinaryIO,
    *,
    headers: Iterable[tuple[str, str]] = (),
) -> Response:
    """Serve *source* as the body for *request*.

    Args:
        request: The inbound request; only its method and validator
            headers are read.
        name: Display name used to infer the Content-Type.
        modified: Last modification time, or ``None`` if unknown. The Unix
            epoch counts as unknown: no ``Last-Modified`` is sent and
            time-based validators are ignored.
        source: Seekable byte stream holding the full content.
        headers: Headers staged for the successful response. A staged
            ``Content-Type`` wins over inference; a staged ``ETag`` takes
            part in validation.
    """
    staged = Response(content_type=None, headers=tuple(headers))
    etag = staged.header("etag") or ""
    content_type = staged.header("content-type") or content_type_for(name)
    staged = staged.without_headers("Content-Type")

    if _known(modified):
        staged = staged.without_headers("Last-Modified").with_header(
            "Last-Modified",
            http_date(modified),  # type: ignore[arg-type]
        )

    # Preconditions: RFC 9110 §13.2.2 evaluation order.
    matched = _if_match(request, etag)
    if matched is None:
        matched = _if_unmodified_since(request, modified)
    if matched is False:
        return serve_error(412, "412 Precondition Failed", headers=staged.headers)

    none_match = _if_none_match(request, etag)
    if none_match is False:
        if request.method in ("GET", "HEAD"):
            return _not_modified(staged, etag)
        return serve_error(412, "412 Precondition Failed", headers=staged.headers)
    if none_match is None and _if_modified_since(request, modified) is False:
        return _not_modified(staged, etag)

    range_header = request.headers.get("range", "")
    if range_header and _if_range(request, etag, modified) is False:
        range_header = ""

    try:
        size = source.seek(0, io.SEEK_END)
        ranges = parse_range(range_header, size)
    except RangeNotSatisfiable as exc:
        if exc.no_overlap:
            staged = staged.with_header("Content-Range", f"bytes */{size}")
        return serve_error(416, str(exc), headers=staged.headers)
    except OSError:
        logger.exception("cannot size content for %s", name)
        return serve_error(500, "500 Internal Server Error", headers=staged.headers)

    if sum(byte_range.length for byte_range in ranges) > size:
        # The client asked for more than the whole body; send it all.
        ranges = []

    status = 200
    try:
        if len(ranges) == 1:
            (byte_range,) = ranges
            source.seek(byte_range.start)
            body = source.read(byte_range.length)
            status = 206
            staged = staged.with_header("Content-Range", byte_range.content_range(size))
        elif ranges:
            body, content_type = _multipart(source, ranges, content_type, size)
            status = 206
        else:
            source.seek(0)
            body = source.read()
    except OSError:
        logger.exception("cannot read content for %s", name)
        return serve_error(500, "500 Internal Server Error", headers=staged.headers)

    return Response(
        body=body,
        status=status,
        content_type=content_type,
        headers=staged.with_header("Accept-Ranges", "bytes").headers,
    )


def _not_modified(staged: Response, etag: str) -> Response:
    response = staged.without_headers("Content-Encoding", "Content-Length")
    if etag:
        response = response.without_headers("Last-Modified")
    return Response(status=304, content_type=None, headers=response.headers)
