"""Example content inserted the first time a store is found empty.

Seeding is keyed on the articles table: if it already has rows, nothing is touched.
Rows are inserted one at a time; a row that fails is logged and skipped, earlier
rows stay in place.
"""

from __future__ import annotations

from typing import Any, Dict, List

from research_portfolio.logger import get_logger
from research_portfolio.repositories import Repositories, TableRepository

log = get_logger(__name__)


SEED_ARTICLES: List[Dict[str, Any]] = [
    {
        "id": "mr001",
        "title": "Tech Sector Valuation Metrics in 2024",
        "category": "market-research",
        "date": "2024-01-15",
        "tags": ["technology", "valuation", "P/E ratios"],
        "content": """# Tech Sector Valuation Metrics in 2024

## Executive Summary

The technology sector continues to trade at elevated valuations despite recent market corrections. This analysis examines key valuation metrics across major tech companies and identifies potential opportunities.

## Key Findings

**Price-to-Earnings Analysis**
- Median P/E ratio for large-cap tech: 28.5x
- Historical average (10-year): 22.1x
- Current premium: 29% above historical average

**Growth Considerations**
The elevated valuations may be justified by:
- Accelerating AI adoption across enterprise
- Cloud computing growth acceleration
- Digital transformation trends

## Investment Implications

**Overweight Positions**
- Cloud infrastructure providers
- AI/ML platform companies
- Cybersecurity leaders

**Underweight Positions**
- Legacy hardware manufacturers
- Traditional software vendors
- Consumer tech with limited moats""",
    },
    {
        "id": "ei001",
        "title": "Federal Reserve Policy Impact Analysis",
        "category": "economic-indicators",
        "date": "2024-01-10",
        "tags": ["federal reserve", "interest rates", "inflation"],
        "content": """# Federal Reserve Policy Impact Analysis

## Current Policy Stance

The Federal Reserve has maintained a hawkish stance with continued rate hikes to combat inflation. This analysis examines the broader economic implications.

## Key Metrics

**Interest Rates**
- Federal Funds Rate: 5.25-5.50%
- 10-Year Treasury: 4.85%
- Real Interest Rate: 2.1%

**Economic Indicators**
- CPI: 3.2% YoY
- Unemployment: 3.8%
- GDP Growth: 2.1% Q3

## Market Implications

The current policy environment suggests:
- Continued pressure on growth stocks
- Value rotation potential
- Defensive positioning recommended""",
    },
]

SEED_STOCKS: List[Dict[str, Any]] = [
    {"symbol": "AAPL", "company_name": "Apple Inc.", "current_price": 175.50, "target_price": 200.00,
     "rating": "BUY", "notes": "Strong iPhone 15 cycle and services growth"},
    {"symbol": "MSFT", "company_name": "Microsoft Corporation", "current_price": 380.25, "target_price": 420.00,
     "rating": "BUY", "notes": "Azure growth and AI integration"},
    {"symbol": "GOOGL", "company_name": "Alphabet Inc.", "current_price": 140.80, "target_price": 160.00,
     "rating": "BUY", "notes": "Search dominance and cloud expansion"},
    {"symbol": "AMZN", "company_name": "Amazon.com Inc.", "current_price": 155.30, "target_price": 180.00,
     "rating": "BUY", "notes": "AWS leadership and retail recovery"},
]

SEED_INDICATORS: List[Dict[str, Any]] = [
    {"name": "GDP Growth Rate", "value": 2.1, "unit": "%", "date": "2024-01-15",
     "description": "Quarterly GDP growth"},
    {"name": "Unemployment Rate", "value": 3.8, "unit": "%", "date": "2024-01-15",
     "description": "Monthly unemployment data"},
    {"name": "CPI Inflation", "value": 3.2, "unit": "%", "date": "2024-01-15",
     "description": "Consumer price index"},
    {"name": "Federal Funds Rate", "value": 5.375, "unit": "%", "date": "2024-01-15",
     "description": "Central bank interest rate"},
]

SEED_BOOKS: List[Dict[str, Any]] = [
    {"title": "The Intelligent Investor", "author": "Benjamin Graham",
     "description": "Classic value investing principles",
     "cover_image": "https://images-na.ssl-images-amazon.com/images/I/91+2lVB8Y2L.jpg",
     "rating": 5, "status": "read"},
    {"title": "A Random Walk Down Wall Street", "author": "Burton Malkiel",
     "description": "Efficient market hypothesis and index investing",
     "cover_image": "https://images-na.ssl-images-amazon.com/images/I/81Q+Qkm4sqL.jpg",
     "rating": 4, "status": "read"},
    {"title": "Security Analysis", "author": "Benjamin Graham",
     "description": "Fundamental analysis techniques",
     "cover_image": "https://images-na.ssl-images-amazon.com/images/I/91+2lVB8Y2L.jpg",
     "rating": 5, "status": "read"},
]


def _insert_all(repo: TableRepository, rows: List[Dict[str, Any]]) -> int:
    inserted = 0
    for row in rows:
        try:
            repo.create(row)
            inserted += 1
        except Exception as e:
            log.warning("Seed row skipped for %s: %s", repo.table, e)
    return inserted


def seed_initial_data(repos: Repositories) -> bool:
    """Insert example rows if the store is empty. Returns True if seeding ran."""
    if repos.articles.count() > 0:
        log.info("Database already contains data, skipping seed")
        return False

    log.info("Seeding initial data...")
    counts = {
        "articles": _insert_all(repos.articles, SEED_ARTICLES),
        "stocks": _insert_all(repos.stocks, SEED_STOCKS),
        "indicators": _insert_all(repos.indicators, SEED_INDICATORS),
        "books": _insert_all(repos.books, SEED_BOOKS),
    }
    log.info("Initial data seeded: %s", counts)
    return True
