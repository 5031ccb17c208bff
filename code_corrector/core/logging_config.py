import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger("code_corrector")


def setup_logging(level: str = "INFO") -> logging.Logger:
    logger.setLevel(level.upper())

    # Evitar handlers duplicados si la app se crea varias veces
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    logger.propagate = False
    return logger


def preview(text: str, limit: int) -> str:
    """Recorta texto para los logs; nunca se registra la respuesta completa."""
    if text is None:
        return ""
    if len(text) <= limit:
        return text
    return text[:limit] + "..."
