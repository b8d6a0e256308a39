from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Union

from src.errors import MalformedPage, MissingBackingPage, PageLoadError
from src.index.index_store import INDEX_FILE_NAME, load_index, save_index
from src.index.records import IndexRecord
from src.ingest.html_ingest import extract_member_records_from_file, extract_page_summary, load_page

logger = logging.getLogger(__name__)

PageResult = Union[List[IndexRecord], Exception]


@dataclass
class MergerConfig:
    output_root: Path = Path("_site")
    index_file_name: str = INDEX_FILE_NAME
    max_workers: int = 1
    encoding: str = "utf-8"

    @property
    def index_path(self) -> Path:
        return Path(self.output_root) / self.index_file_name


class MemberIndexMerger:
    """
    Обновляет index.json в два прохода:
    1) refresh — перечитывает summary у уже проиндексированных записей (ошибка = фатально);
    2) extraction — upsert записей со страниц-кандидатов (битые страницы пропускаются).
    """

    def __init__(self, cfg: MergerConfig):
        self.cfg = cfg
        self.root = Path(cfg.output_root)

    # --- refresh ---------------------------------------------------------------

    def _refresh_one(self, key: str, record: IndexRecord) -> Optional[str]:
        page_path = self.root / record.page_path
        try:
            soup = load_page(page_path, encoding=self.cfg.encoding)
        except PageLoadError as e:
            raise MissingBackingPage(key, str(page_path)) from e
        return extract_page_summary(soup, record.fragment)

    def refresh_summaries(self, index: Dict[str, IndexRecord]) -> None:
        keys = list(index.keys())
        summaries = self._map(lambda k: self._refresh_one(k, index[k]), keys)
        refreshed = 0
        for key, summary in zip(keys, summaries):
            if summary is None:
                continue
            index[key] = index[key].with_summary(summary)
            refreshed += 1
        logger.debug("[index] refreshed summaries for %d of %d existing entries", refreshed, len(keys))

    # --- extraction ----------------------------------------------------------

    def _extract_one(self, relative_path: str) -> PageResult:
        page_path = self.root / relative_path
        if not page_path.is_file():
            return PageLoadError(str(page_path), "file does not exist")
        try:
            return extract_member_records_from_file(self.root, relative_path, encoding=self.cfg.encoding)
        except (PageLoadError, MalformedPage) as e:
            return e

    def extract_pages(self, index: Dict[str, IndexRecord], pages: Sequence[str]) -> int:
        """Upsert records from each page; returns the number of pages skipped."""
        skipped = 0
        for relative_path, result in zip(pages, self._map(self._extract_one, pages)):
            if isinstance(result, Exception):
                logger.warning("[index] Warning: %s", result)
                skipped += 1
                continue
            logger.debug("[index] %s -> %d members", relative_path, len(result))
            for record in result:
                index[record.anchor] = record
        return skipped

    # --- run -----------------------------------------------------------------

    def merge(self, index: Dict[str, IndexRecord], pages: Iterable[str]) -> Dict[str, IndexRecord]:
        pages = list(pages)
        self.refresh_summaries(index)
        if pages:
            logger.info("[index] Extracting member index data from %d html files", len(pages))
            skipped = self.extract_pages(index, pages)
            if skipped:
                logger.info("[index] skipped %d of %d pages", skipped, len(pages))
        return index

    def run(self, pages: Iterable[str]) -> Dict[str, IndexRecord]:
        index_path = self.cfg.index_path
        index = load_index(index_path)
        self.merge(index, pages)
        save_index(index_path, index)
        logger.info("[index] wrote %d entries -> %s", len(index), index_path)
        return index

    def _map(self, fn, items: Sequence) -> Iterator:
        # результаты всегда в порядке входа, запись в индекс только из этого потока
        if self.cfg.max_workers <= 1 or len(items) <= 1:
            return map(fn, items)
        return _ordered_pool_map(fn, items, self.cfg.max_workers)


def _ordered_pool_map(fn, items: Sequence, max_workers: int) -> Iterator:
    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="index") as ex:
        results = list(ex.map(fn, items))
    return iter(results)
