"""Export the VoteCast OpenAPI document."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from votecast.core.logging import configure_logging
from votecast.main import create_application

logger = logging.getLogger(__name__)


def main(destination: Path = Path("docs/openapi.json")) -> None:
    configure_logging()
    spec = create_application().openapi()
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(json.dumps(spec, indent=2), encoding="utf-8")
    logger.info("OpenAPI specification written to %s", destination)


if __name__ == "__main__":
    main()
