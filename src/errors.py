from __future__ import annotations

from typing import Optional


class MemberIndexError(Exception):
    """Base class for every failure raised while building the member index."""


class MalformedPage(MemberIndexError):
    """Page does not have the structure of a rendered type reference page."""

    def __init__(self, reason: str, relative_path: Optional[str] = None):
        where = f" {relative_path}" if relative_path else ""
        super().__init__(f"Malformed page{where}: {reason}")
        self.reason = reason
        self.relative_path = relative_path


class UnknownSectionMarker(MemberIndexError):
    def __init__(self, marker_id: Optional[str]):
        super().__init__(f"Unknown item type {marker_id}")
        self.marker_id = marker_id


class PageLoadError(MemberIndexError):
    def __init__(self, path: str, reason: str):
        super().__init__(f"Can't load content from {path}: {reason}")
        self.path = path
        self.reason = reason


class MissingBackingPage(MemberIndexError):
    """An already indexed entry points to a page that can no longer be read."""

    def __init__(self, anchor: str, path: str):
        super().__init__(f"Can't load content from existing item {path} (anchor {anchor})")
        self.anchor = anchor
        self.path = path


class IndexFormatError(MemberIndexError):
    pass


class ManifestError(MemberIndexError):
    def __init__(self, path: str, reason: str):
        super().__init__(f"Can't read manifest {path}: {reason}")
        self.path = path
        self.reason = reason
