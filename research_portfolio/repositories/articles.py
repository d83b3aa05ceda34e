from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from .base import TableRepository

# Category slugs used by the front end. Not enforced: any non-empty string is accepted.
ARTICLE_CATEGORIES = ("market-research", "economic-indicators", "bookshelf")


def encode_tags(tags: Optional[List[str]]) -> str:
    return json.dumps([str(t) for t in (tags or [])], ensure_ascii=False)


def decode_tags(raw: Any) -> List[str]:
    """Tags column -> ordered list of strings. NULL, blank and junk become []."""
    if raw is None or not str(raw).strip():
        return []
    try:
        value = json.loads(raw)
    except (TypeError, ValueError):
        return []
    if not isinstance(value, list):
        return []
    return [str(t) for t in value]


def _like_escape(s: str) -> str:
    return s.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class ArticleRepository(TableRepository):
    table = "articles"
    entity = "article"
    integer_key = False
    insert_columns = ("id", "title", "category", "content", "date", "tags")
    update_columns = ("title", "category", "content", "date", "tags")
    order_by = "date DESC"
    conflict_detail = "article_id_exists"

    def _encode(self, data: Dict[str, Any]) -> Dict[str, Any]:
        d = dict(data)
        d["tags"] = encode_tags(d.get("tags"))
        return d

    def _decode(self, row: Any) -> Dict[str, Any]:
        d = dict(row)
        d["tags"] = decode_tags(d.get("tags"))
        return d

    def list(
        self,
        *,
        category: Optional[str] = None,
        search: Optional[str] = None,
        **_: Any,
    ) -> List[Dict[str, Any]]:
        """List articles, newest first.

        - category: exact match
        - search: case-insensitive substring of title, content or the serialized tags

        Both filters are ANDed when given.
        """
        clauses: List[str] = []
        params: List[Any] = []

        if category:
            clauses.append("category = ?")
            params.append(category)

        if search:
            term = f"%{_like_escape(search)}%"
            clauses.append(
                "(title LIKE ? ESCAPE '\\' OR content LIKE ? ESCAPE '\\' OR tags LIKE ? ESCAPE '\\')"
            )
            params.extend([term, term, term])

        return self._select(" AND ".join(clauses), params)
