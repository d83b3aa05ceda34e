from __future__ import annotations

from typing import Any, Dict

from .base import TableRepository

BOOK_STATUSES = ("read", "reading", "to-read")
DEFAULT_BOOK_STATUS = "read"


class BookRepository(TableRepository):
    table = "books"
    entity = "book"
    insert_columns = ("title", "author", "description", "cover_image", "rating", "status")
    update_columns = insert_columns
    order_by = "title ASC"

    def _encode(self, data: Dict[str, Any]) -> Dict[str, Any]:
        d = dict(data)
        # The column is NOT NULL; an omitted status means "read".
        if not d.get("status"):
            d["status"] = DEFAULT_BOOK_STATUS
        return d
