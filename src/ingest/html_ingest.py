from __future__ import annotations

from pathlib import Path
from typing import Iterator, List, Optional

from bs4 import BeautifulSoup, Tag

from src.errors import MalformedPage, PageLoadError
from src.index.records import IndexRecord
from src.ingest.keywords import MEMBER_TAG, collect_keywords, synthesize_title
from src.ingest.sections import ContainerKind, classify_heading

TYPE_HEADER_TAG = "h1"
SUMMARY_CLASS = "summary"


# --- Утилиты -----------------------------------------------------------------

def _text(el: Tag) -> str:
    return el.get_text().strip()


def load_page(path: str | Path, encoding: str = "utf-8") -> BeautifulSoup:
    path = Path(path)
    try:
        html = path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as e:
        raise PageLoadError(str(path), str(e)) from e
    return BeautifulSoup(html, "html.parser")


def read_type_name(soup: BeautifulSoup, relative_path: Optional[str] = None) -> str:
    header = soup.find(TYPE_HEADER_TAG)
    if header is None:
        raise MalformedPage(f"no <{TYPE_HEADER_TAG}> type header", relative_path)
    return _text(header)


def read_member_summary(heading: Tag) -> Optional[str]:
    """Text of the sibling right after the heading, when it is marked as a summary."""
    nxt = heading.find_next_sibling()
    if nxt is None or SUMMARY_CLASS not in (nxt.get("class") or []):
        return None
    return _text(nxt)


def extract_page_summary(soup: BeautifulSoup, fragment: Optional[str] = None) -> Optional[str]:
    """
    Summary-only extraction used when refreshing already indexed entries.
    Member anchors read the summary next to their heading (None once the heading
    is gone); anchors without a fragment (type pages) read the summary under the
    type header.
    """
    if fragment:
        el = soup.find(id=fragment)
        return read_member_summary(el) if el is not None else None
    type_summary = soup.select_one(f"{TYPE_HEADER_TAG} + div.{SUMMARY_CLASS}")
    if type_summary is None:
        return None
    return _text(type_summary)


# --- Извлечение членов типа ----------------------------------------------

def _build_keywords(signature: Optional[str], member_id: str, raw_signature: str, tokens: List[str]) -> str:
    id_spaced = member_id.replace("_", " ").strip()
    return f"{signature or ''} {id_spaced} {raw_signature} {' '.join(tokens)}"


def extract_member_records(soup: BeautifulSoup, relative_path: str) -> Iterator[IndexRecord]:
    """
    Один IndexRecord на каждый h4 (член типа) в порядке документа.
    Заголовки внутри секций вложенных типов (classes, enums, ...) пропускаются.
    """
    type_name = read_type_name(soup, relative_path)

    for heading in soup.find_all(MEMBER_TAG):
        raw_signature = _text(heading)
        member_id = heading.get("id")
        signature = heading.get("data-uid")

        kind = classify_heading(heading)
        if isinstance(kind, ContainerKind):
            continue
        if not member_id:
            raise MalformedPage(f"<{MEMBER_TAG}> '{raw_signature}' has no id", relative_path)

        summary = read_member_summary(heading)
        tokens, alias = collect_keywords(heading)
        title = synthesize_title(kind, raw_signature, type_name, alias)

        yield IndexRecord(
            anchor=f"{relative_path}#{member_id}",
            title=title,
            keywords=_build_keywords(signature, member_id, raw_signature, tokens),
            signature=signature,
            summary=summary,
        )


def extract_member_records_from_file(root: str | Path, relative_path: str, encoding: str = "utf-8") -> List[IndexRecord]:
    """Load one page under the output root and drain its records."""
    soup = load_page(Path(root) / relative_path, encoding=encoding)
    try:
        return list(extract_member_records(soup, relative_path))
    except MalformedPage as e:
        if e.relative_path is None:
            raise MalformedPage(e.reason, relative_path) from e
        raise
