"""Process-wide logging setup.

Log format:
    2026-01-01 12:00:00,000 INFO [fpl.request] [POST] /graphql → 200 (12ms) req_a1b2c3d4
"""

import logging

from config.settings import settings

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format=_FORMAT,
    )
