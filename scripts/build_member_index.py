from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional, Sequence

from src.errors import MemberIndexError
from src.index.index_store import INDEX_FILE_NAME
from src.index.merger import MemberIndexMerger, MergerConfig
from src.ingest.manifest_ingest import MANIFEST_FILE_NAME, find_member_pages, load_manifest

logger = logging.getLogger("build_member_index")


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        description="Add members (methods, properties, fields, ...) of generated API pages to the search index.json"
    )
    p.add_argument("output_root", type=Path, help="Site output folder (contains index.json and manifest.json)")
    p.add_argument("--manifest", type=Path, default=None,
                   help=f"Manifest listing generated files (default: <output_root>/{MANIFEST_FILE_NAME})")
    p.add_argument("--page", action="append", default=[], dest="pages",
                   help="Relative page path to index; repeatable, bypasses the manifest")
    p.add_argument("--index-file", default=INDEX_FILE_NAME, help="Index file name relative to output_root")
    p.add_argument("--workers", type=int, default=1, help="Parse pages in this many threads")
    p.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return p


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def resolve_pages(args: argparse.Namespace) -> List[str]:
    if args.pages:
        return [p.replace("\\", "/") for p in args.pages]
    manifest_path = args.manifest or (args.output_root / MANIFEST_FILE_NAME)
    if not manifest_path.exists():
        logger.warning("[index] manifest %s not found, only refreshing existing entries", manifest_path)
        return []
    return find_member_pages(load_manifest(manifest_path))


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    _configure_logging(args.verbose)

    cfg = MergerConfig(
        output_root=args.output_root,
        index_file_name=args.index_file,
        max_workers=max(1, args.workers),
    )
    try:
        pages = resolve_pages(args)
        MemberIndexMerger(cfg).run(pages)
    except MemberIndexError as e:
        logger.error("[index] %s", e)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
