from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional


# Запись индекса: один документированный член типа
@dataclass(frozen=True)
class IndexRecord:
    anchor: str
    title: str
    keywords: str
    signature: Optional[str] = None
    summary: Optional[str] = None

    @property
    def page_path(self) -> str:
        return self.anchor.split("#", 1)[0]

    @property
    def fragment(self) -> Optional[str]:
        _, sep, frag = self.anchor.partition("#")
        return frag if sep and frag else None

    def with_summary(self, summary: Optional[str]) -> "IndexRecord":
        return replace(self, summary=summary)

    def to_json(self) -> Dict[str, Any]:
        # порядок полей = порядок в index.json
        return {
            "href": self.anchor,
            "title": self.title,
            "keywords": self.keywords,
            "ct_sig": self.signature,
            "ct_sum": self.summary,
        }

    @classmethod
    def from_json(cls, obj: Dict[str, Any], anchor: Optional[str] = None) -> "IndexRecord":
        return cls(
            anchor=obj.get("href") or anchor or "",
            title=obj.get("title") or "",
            keywords=obj.get("keywords") or "",
            signature=obj.get("ct_sig"),
            summary=obj.get("ct_sum"),
        )
