from __future__ import annotations

import json
import os
import stat
import tempfile
from pathlib import Path
from typing import Dict

from src.errors import IndexFormatError
from src.index.records import IndexRecord

INDEX_FILE_NAME = "index.json"


def load_index(path: str | Path) -> Dict[str, IndexRecord]:
    path = Path(path)
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as e:
            raise IndexFormatError(f"{path} is not valid JSON: {e}") from e
    if not isinstance(raw, dict):
        raise IndexFormatError(f"{path}: expected a JSON object at top level, got {type(raw).__name__}")

    index: Dict[str, IndexRecord] = {}
    for key, obj in raw.items():
        if not isinstance(obj, dict):
            raise IndexFormatError(f"{path}: entry {key!r} is not an object")
        index[key] = IndexRecord.from_json(obj, anchor=key)
    return index


def dump_index(index: Dict[str, IndexRecord]) -> str:
    payload = {key: rec.to_json() for key, rec in index.items()}
    return json.dumps(payload, ensure_ascii=False, indent=2) + "\n"


def _target_mode(path: Path) -> int:
    if path.exists():
        return stat.S_IMODE(path.stat().st_mode)
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def save_index(path: str | Path, index: Dict[str, IndexRecord]) -> None:
    """Overwrite the index file in full; the old file stays intact if writing fails."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    text = dump_index(index)
    mode = _target_mode(path)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(text)
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise
