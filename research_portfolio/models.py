from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class Identity:
    """The authenticated caller embedded in a bearer token."""

    username: str
    role: str = "admin"

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)
