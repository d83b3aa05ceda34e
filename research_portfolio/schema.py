"""Database schema for the Research Portfolio.

Timestamps are ISO-8601 TEXT (UTC, with 'Z') stamped by the repositories, not by
column defaults, so every engine and every code path agrees on the format.

Article tags are stored as a JSON array in a TEXT column.
"""

from __future__ import annotations


SCHEMA_SQLITE = r"""
CREATE TABLE IF NOT EXISTS articles (
    id TEXT PRIMARY KEY,
    title TEXT NOT NULL,
    category TEXT NOT NULL,
    content TEXT NOT NULL,
    date TEXT NOT NULL,
    tags TEXT,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_articles_category_date ON articles (category, date);

CREATE TABLE IF NOT EXISTS stocks (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    symbol TEXT NOT NULL UNIQUE,
    company_name TEXT NOT NULL,
    current_price REAL,
    target_price REAL,
    rating TEXT,
    notes TEXT,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS indicators (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    value REAL NOT NULL,
    unit TEXT,
    date TEXT NOT NULL,
    description TEXT,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_indicators_date_name ON indicators (date, name);

CREATE TABLE IF NOT EXISTS books (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL,
    author TEXT NOT NULL,
    description TEXT,
    cover_image TEXT,
    rating INTEGER CHECK (rating IS NULL OR (rating BETWEEN 1 AND 5)),
    status TEXT NOT NULL DEFAULT 'read' CHECK (status IN ('read','reading','to-read')),
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);
"""


def get_schema_sql() -> str:
    return SCHEMA_SQLITE
