"""Create the votes table against DATABASE_URL without starting the server."""
from __future__ import annotations

from votecast.core.logging import configure_logging
from votecast.db.session import create_schema


def main() -> None:
    configure_logging()
    create_schema()


if __name__ == "__main__":
    main()
