"""What the router decided to do with a request.

Exactly one disposition is produced per request, and it is complete
before anything is written to the client.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import BinaryIO, TypeAlias

from spaserve.content import EPOCH


@dataclass(frozen=True, slots=True)
class Redirect:
    """Moved Permanently to a relative *location* (``./`` plus query)."""

    location: str
    status: int = 301


@dataclass(frozen=True, slots=True)
class ServeDocument:
    """Serve the entry document with no-cache and security headers.

    ``modified`` stays at the epoch so no cache can revalidate by time.
    """

    body: bytes
    modified: datetime = EPOCH


@dataclass(frozen=True, slots=True)
class ServeAsset:
    """Serve a static asset as-is.

    ``source`` belongs to an open store handle and is only readable
    inside the router's ``resolve()`` block.
    """

    name: str
    source: BinaryIO
    modified: datetime | None


@dataclass(frozen=True, slots=True)
class ServeError:
    """Answer with an error status and a short text."""

    status: int
    text: str


Disposition: TypeAlias = Redirect | ServeDocument | ServeAsset | ServeError
