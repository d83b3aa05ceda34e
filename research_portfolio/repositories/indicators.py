from __future__ import annotations

from .base import TableRepository


class IndicatorRepository(TableRepository):
    table = "indicators"
    entity = "indicator"
    insert_columns = ("name", "value", "unit", "date", "description")
    update_columns = insert_columns
    order_by = "date DESC, name ASC"
