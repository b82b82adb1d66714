"""Homepage hero slide record."""

from __future__ import annotations

from sitesync.models._base import SiteRecord


class Slide(SiteRecord):
    """A hero slideshow slide. Ordering is insertion order."""

    image: str = ""
    title: str = ""
    subtitle: str = ""
    active: bool = True
