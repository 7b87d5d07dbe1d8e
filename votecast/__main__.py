"""Run the service with uvicorn: ``python -m votecast``."""
from __future__ import annotations

import uvicorn

from votecast.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run("votecast.main:app", host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
