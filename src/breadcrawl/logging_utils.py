import logging
import sys

LOG_FORMAT = "%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s | %(message)s"


def setup_logging(level: str = "WARNING") -> None:
    """Send log records to stderr; stdout stays reserved for generated output."""
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")
    logging.basicConfig(
        level=logging.WARNING,
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )
    logging.getLogger("breadcrawl").setLevel(numeric_level)
