from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Union

from bs4 import Tag

from src.errors import MalformedPage, UnknownSectionMarker


class ItemType(str, Enum):
    OPERATOR = "Operator"
    EVENT = "Event"
    PROPERTY = "Property"
    FIELD = "Field"
    METHOD = "Method"
    CONSTRUCTOR = "Constructor"
    EXPLICIT_INTERFACE_IMPLEMENTATION = "Explicit Interface Implementation"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ContainerKind:
    """Heading sits in a nested-type section (classes, enums, ...), indexed elsewhere."""
    marker: str


# --- Словарь маркеров секций (id у h3) -------------------------------------

CONTAINER_MARKERS = frozenset({"classes", "structs", "enums", "interfaces", "delegates", "aliases"})

ITEM_TYPE_BY_MARKER: Dict[str, ItemType] = {
    "operators": ItemType.OPERATOR,
    "events": ItemType.EVENT,
    "properties": ItemType.PROPERTY,
    "fields": ItemType.FIELD,
    "methods": ItemType.METHOD,
    "constructors": ItemType.CONSTRUCTOR,
    "eii": ItemType.EXPLICIT_INTERFACE_IMPLEMENTATION,
}

SECTION_TAG = "h3"


def find_section_marker(heading: Tag) -> Tag:
    """Nearest preceding h3 sibling of a member heading."""
    marker = heading.find_previous_sibling(SECTION_TAG)
    if marker is None:
        raise MalformedPage(f"heading #{heading.get('id')} has no preceding <{SECTION_TAG}> section marker")
    return marker


def classify_marker(marker_id: str | None) -> Union[ItemType, ContainerKind]:
    if marker_id in CONTAINER_MARKERS:
        return ContainerKind(marker_id)
    item_type = ITEM_TYPE_BY_MARKER.get(marker_id) if marker_id else None
    if item_type is None:
        raise UnknownSectionMarker(marker_id)
    return item_type


def classify_heading(heading: Tag) -> Union[ItemType, ContainerKind]:
    return classify_marker(find_section_marker(heading).get("id"))
