"""
Configuración de logging para los scripts.

Los módulos del paquete registran con logging.getLogger(__name__), que
cuelga del logger "borme"; aquí solo se le añaden handlers.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from .config import LOGS_DIR

FORMATO_LOG = "%(asctime)s | %(levelname)-8s | %(message)s"
FORMATO_FECHA_LOG = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    prefijo: str = "borme",
    logs_dir: Optional[Path] = LOGS_DIR,
    nivel_consola: int = logging.INFO
) -> logging.Logger:
    """
    Configura el logger "borme": consola (INFO) y fichero (DEBUG).

    Args:
        prefijo: Prefijo del fichero de log (<prefijo>_<timestamp>.log)
        logs_dir: Directorio de logs; None desactiva el fichero
        nivel_consola: Nivel del handler de consola
    """
    formatter = logging.Formatter(FORMATO_LOG, datefmt=FORMATO_FECHA_LOG)

    logger = logging.getLogger("borme")
    logger.setLevel(logging.DEBUG)
    logger.handlers.clear()

    if logs_dir is not None:
        logs_dir = Path(logs_dir)
        logs_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

        file_handler = logging.FileHandler(logs_dir / f"{prefijo}_{timestamp}.log", encoding="utf-8")
        file_handler.setFormatter(formatter)
        file_handler.setLevel(logging.DEBUG)
        logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(nivel_consola)
    logger.addHandler(console_handler)

    return logger
