"""One repository per resource table.

Repositories are built once per app (see `build_repositories`) and handed to the
route handlers, so tests can swap any of them out.
"""

from __future__ import annotations

from dataclasses import dataclass

from research_portfolio.db import Database

from .articles import ARTICLE_CATEGORIES, ArticleRepository
from .base import TableRepository
from .books import BOOK_STATUSES, BookRepository
from .indicators import IndicatorRepository
from .stocks import StockRepository


@dataclass
class Repositories:
    db: Database
    articles: ArticleRepository
    stocks: StockRepository
    indicators: IndicatorRepository
    books: BookRepository


def build_repositories(db: Database) -> Repositories:
    return Repositories(
        db=db,
        articles=ArticleRepository(db),
        stocks=StockRepository(db),
        indicators=IndicatorRepository(db),
        books=BookRepository(db),
    )


__all__ = [
    "ARTICLE_CATEGORIES",
    "BOOK_STATUSES",
    "ArticleRepository",
    "BookRepository",
    "IndicatorRepository",
    "Repositories",
    "StockRepository",
    "TableRepository",
    "build_repositories",
]
