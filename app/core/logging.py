# app/core/logging.py
import logging

LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
    # httpx loguea cada request en INFO; demasiado ruido para el sidecar
    logging.getLogger("httpx").setLevel(logging.WARNING)
