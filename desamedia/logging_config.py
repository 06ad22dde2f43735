import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _resolve_log_level(raw_level: str) -> int:
    resolved = getattr(logging, (raw_level or "").strip().upper(), None)
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(app):
    level = _resolve_log_level(app.config.get("LOG_LEVEL", "INFO"))

    logger = logging.getLogger("desamedia")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler(stream=sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    app.logger.setLevel(level)
    app.logger.info("logging siap level=%s", logging.getLevelName(level))
