"""Research Portfolio - Backend.

A single-administrator research site:
- Anonymous visitors read articles, tracked stocks, economic indicators and the book list.
- One administrator (configured via environment) writes them, authenticated with a JWT.

Core concepts:
- Each resource is an independent table with a repository in front of it.
- Auth is decided per route: required for writes, optional for reads.

See README for setup and usage.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
