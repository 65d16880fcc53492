import logging
import os

LOG_LEVEL_ENV = "EMITTER_LOG_LEVEL"


def configure_logging(default_level: int = logging.INFO) -> int:
    """Configure the root logger for applications embedding the emitter.

    Respects EMITTER_LOG_LEVEL if present; an unknown level name keeps the default.
    Returns the level that was applied.
    """
    level_name = os.getenv(LOG_LEVEL_ENV)
    level = default_level
    if level_name:
        candidate = getattr(logging, level_name.strip().upper(), None)
        if isinstance(candidate, int):
            level = candidate
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] [%(levelname)s] %(name)s: %(message)s",
    )
    logging.getLogger("emitter").setLevel(level)
    return level
