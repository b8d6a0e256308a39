from __future__ import annotations

import re
from typing import Iterator, List, Optional, Tuple

from bs4 import Tag

from src.ingest.sections import ItemType

MEMBER_TAG = "h4"
ALIASES_SUFFIX = "_aliases"

ALL_WORDS = re.compile(r"\w+")


def _text(el: Tag) -> str:
    return el.get_text().strip()


def iter_member_window(heading: Tag) -> Iterator[Tag]:
    """Element siblings after a member heading, up to the next member heading."""
    sibling = heading.find_next_sibling()
    while sibling is not None and sibling.name != MEMBER_TAG:
        yield sibling
        sibling = sibling.find_next_sibling()


def tokenize(text: str) -> List[str]:
    return ALL_WORDS.findall(text)


def first_word(text: str) -> str:
    m = ALL_WORDS.search(text)
    return m.group(0) if m else ""


def find_alias(heading: Tag) -> Optional[str]:
    """
    Alias block is a pair of siblings: a marker with id "<member id>_aliases"
    followed by the element holding the alias text.
    """
    member_id = heading.get("id")
    if not member_id:
        return None
    marker_id = member_id + ALIASES_SUFFIX
    for sibling in iter_member_window(heading):
        if sibling.get("id") != marker_id:
            continue
        alias_el = sibling.find_next_sibling()
        if alias_el is None:
            return None
        return _text(alias_el)
    return None


def collect_keywords(heading: Tag) -> Tuple[List[str], Optional[str]]:
    keywords: List[str] = []
    for sibling in iter_member_window(heading):
        keywords.extend(tokenize(_text(sibling)))
    return keywords, find_alias(heading)


def synthesize_title(item_type: ItemType, raw_signature: str, type_name: str, alias: Optional[str] = None) -> str:
    if item_type is ItemType.CONSTRUCTOR:
        title = f"Constructor {raw_signature}"
    else:
        title = f"{item_type.value} {first_word(raw_signature)} in {type_name}"
    if alias is not None:
        title += f" (like {alias})"
    return title
