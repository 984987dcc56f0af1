"""Parsing of notification deep links of the form ``/{resource_type}/{id}``."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final

_LINK_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^/(?P<resource_type>[a-z][a-z0-9_-]*)/(?P<resource_id>[0-9]+)/?$"
)


@dataclass(frozen=True)
class ResourceLink:
    """Internal resource referenced by a notification link."""

    resource_type: str
    resource_id: int


def parse_resource_link(link: str | None) -> ResourceLink | None:
    """Return the resource referenced by ``link`` or ``None``.

    Only strict ``/{type}/{positive integer}`` paths qualify. External URLs,
    query strings and non numeric identifiers are ignored.
    """

    if not isinstance(link, str):
        return None
    match = _LINK_PATTERN.match(link.strip())
    if match is None:
        return None
    resource_id = int(match.group("resource_id"))
    if resource_id <= 0:
        return None
    return ResourceLink(match.group("resource_type"), resource_id)


def build_resource_link(resource_type: str, resource_id: int) -> str:
    """Return the canonical link for ``resource_type`` / ``resource_id``."""

    return f"/{resource_type}/{resource_id}"


__all__ = ["ResourceLink", "build_resource_link", "parse_resource_link"]
