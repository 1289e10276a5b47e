
import logging
import os

def setup_logging(level: str | None = None) -> logging.Logger:
    """
    Configura el logging de la aplicación (CLI / scripts). Los módulos de
    la librería sólo usan getLogger(__name__) y nunca añaden handlers.
    """
    level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        format="%(asctime)s | %(levelname)8s | %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    # los avisos de scikit-rf / numpy pasan por el mismo formato
    logging.captureWarnings(True)
    logger = logging.getLogger("snpcodec")
    logger.setLevel(level)
    return logger
