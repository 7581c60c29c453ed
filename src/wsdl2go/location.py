"""Locations of WSDL/XSD resources: filesystem paths or network URLs."""

import os
from typing import Optional
from urllib.parse import urldefrag, urljoin, urlparse

from .exceptions import InputError


def _has_network_scheme(value: str) -> bool:
    # Single letter schemes are Windows drive letters (C:\...)
    scheme = urlparse(value).scheme
    return len(scheme) > 1


class Location:
    """Either a filesystem path or a network URL.

    Exactly one of ``path`` and ``url`` is set. ``str(location)`` is the
    canonical form used as the key of the visited-location set.
    """

    __slots__ = ("path", "url")

    def __init__(self, path: Optional[str] = None, url: Optional[str] = None):
        if (path is None) == (url is None):
            raise ValueError("Location needs exactly one of path or url")
        self.path = os.path.normpath(os.path.abspath(path)) if path is not None else None
        self.url = urldefrag(url)[0] if url is not None else None

    @classmethod
    def parse(cls, raw: str) -> "Location":
        """Parse a root location string."""
        raw = (raw or "").strip()
        if not raw:
            raise InputError("WSDL location is required")
        if _has_network_scheme(raw):
            return cls(url=raw)
        return cls(path=raw)

    @property
    def is_url(self) -> bool:
        return self.url is not None

    def resolve(self, ref: str) -> "Location":
        """Resolve a (possibly relative) reference against this location."""
        ref = ref.strip()
        if self.url is not None:
            return Location(url=urljoin(self.url, ref))
        if os.path.isabs(ref):
            return Location(path=ref)
        if _has_network_scheme(ref):
            return Location(url=ref)
        return Location(path=os.path.join(os.path.dirname(self.path), ref))

    def __str__(self) -> str:
        return self.url if self.url is not None else self.path

    def __repr__(self) -> str:
        kind = "url" if self.is_url else "path"
        return f"Location({kind}={str(self)!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Location):
            return NotImplemented
        return str(self) == str(other) and self.is_url == other.is_url

    def __hash__(self) -> int:
        return hash((self.is_url, str(self)))


def parse_location(raw: str) -> Location:
    """Parse a root location string into a Location."""
    return Location.parse(raw)
