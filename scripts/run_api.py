import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

import uvicorn

from research_portfolio.config import load_config


def main() -> None:
    cfg = load_config()
    uvicorn.run(
        "research_portfolio.api.server:app",
        host=cfg.API_HOST,
        port=cfg.API_PORT,
        reload=False,
        log_level=cfg.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
