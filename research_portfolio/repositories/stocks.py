from __future__ import annotations

from .base import TableRepository


class StockRepository(TableRepository):
    """Tracked stocks. `symbol` is unique and fixed once created."""

    table = "stocks"
    entity = "stock"
    insert_columns = ("symbol", "company_name", "current_price", "target_price", "rating", "notes")
    update_columns = ("company_name", "current_price", "target_price", "rating", "notes")
    order_by = "symbol ASC"
    conflict_detail = "stock_symbol_exists"
