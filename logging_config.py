import logging
import sys

DEFAULT_FORMAT = '%(levelname)s - %(message)s'

def setup_logging(level=logging.INFO, fmt=DEFAULT_FORMAT):
    """
    Logging configuration for the setup verifier.
    Everything goes to stdout so failures interleave with the progress lines.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logging.basicConfig(
        level=level,
        format=fmt,
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )

    # Minimize noisy logs from the database stack
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)
    logging.getLogger("asyncpg").setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.debug("Logging configured successfully.")
