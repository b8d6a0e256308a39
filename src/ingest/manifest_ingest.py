from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

from src.errors import ManifestError

MANIFEST_FILE_NAME = "manifest.json"
MEMBER_DOCUMENT_TYPE = "ManagedReference"
HTML_EXTENSION = ".html"


def load_manifest(path: str | Path) -> Dict[str, Any]:
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            manifest = json.loads(f.read())
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ManifestError(str(path), str(e)) from e
    if not isinstance(manifest, dict):
        raise ManifestError(str(path), f"expected a JSON object, got {type(manifest).__name__}")
    return manifest


def _as_dict(value: Any, what: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ManifestError(MANIFEST_FILE_NAME, f"{what} is {type(value).__name__}, expected an object")
    return value


def find_member_pages(manifest: Dict[str, Any]) -> List[str]:
    """
    Относительные пути html-страниц со справкой по типам (ManagedReference).
    Ключ расширения сравнивается без учёта регистра.
    """
    files = manifest.get("files") or []
    if not isinstance(files, list):
        raise ManifestError(MANIFEST_FILE_NAME, f"'files' is {type(files).__name__}, expected a list")

    pages: List[str] = []
    seen: set[str] = set()
    for item in files:
        item = _as_dict(item, "file entry")
        if item.get("type") != MEMBER_DOCUMENT_TYPE:
            continue
        for ext, output in _as_dict(item.get("output"), "'output'").items():
            if ext.lower() != HTML_EXTENSION:
                continue
            rel = _as_dict(output, f"'output.{ext}'").get("relative_path") or ""
            if not isinstance(rel, str):
                raise ManifestError(MANIFEST_FILE_NAME, f"relative_path of {ext} output is not a string")
            rel = rel.replace("\\", "/")
            if not rel or rel in seen:
                continue
            seen.add(rel)
            pages.append(rel)
    return pages
