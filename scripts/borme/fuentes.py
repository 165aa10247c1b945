"""
Fuentes de bytes para el parser.

El núcleo nunca descarga nada: recibe un fichero local o un buffer
ya descargado y lo decodifica a texto.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

from .config import FIRMA_PDF_BINARIO
from .errores import BinaryFormatUnsupportedError, UnreadableSourceError

logger = logging.getLogger(__name__)


# =============================================================================
# CLASES BASE
# =============================================================================

class Fuente(ABC):
    """
    Origen de los bytes de un documento.

    Cada fuente implementa la lectura manteniendo una interfaz común.
    """

    @abstractmethod
    def leer(self) -> bytes:
        """
        Lee el contenido completo.

        Raises:
            UnreadableSourceError: Si no se puede abrir o leer
        """
        pass

    @property
    @abstractmethod
    def nombre(self) -> Optional[str]:
        """Identificador del origen (nombre de fichero), si existe."""
        pass


class FuenteArchivo(Fuente):
    """Fichero local."""

    def __init__(self, file_path: Union[str, Path]):
        self.file_path = Path(file_path)

    @property
    def nombre(self) -> str:
        return self.file_path.name

    def leer(self) -> bytes:
        try:
            return self.file_path.read_bytes()
        except OSError as e:
            raise UnreadableSourceError(self.file_path, e) from e


class FuenteMemoria(Fuente):
    """Buffer ya descargado."""

    def __init__(self, datos: Union[bytes, bytearray], nombre: Optional[str] = None):
        self.datos = bytes(datos)
        self._nombre = nombre

    @property
    def nombre(self) -> Optional[str]:
        return self._nombre

    def leer(self) -> bytes:
        return self.datos


# =============================================================================
# FACTORY
# =============================================================================

def crear_fuente(origen) -> Fuente:
    """
    Crea la fuente apropiada según el tipo de origen.

    Args:
        origen: Fuente, bytes/bytearray (buffer) o str/Path (ruta)

    Raises:
        TypeError: Si el tipo de origen no es soportado
    """
    if isinstance(origen, Fuente):
        return origen
    if isinstance(origen, (bytes, bytearray)):
        return FuenteMemoria(origen)
    if isinstance(origen, (str, Path)):
        return FuenteArchivo(origen)
    raise TypeError(f"Tipo de origen no soportado: {type(origen).__name__}")


def es_pdf_binario(datos: Union[bytes, str]) -> bool:
    """True si el contenido (bytes o texto ya leído) es un PDF sin decodificar."""
    firma = FIRMA_PDF_BINARIO.decode("ascii") if isinstance(datos, str) else FIRMA_PDF_BINARIO
    return datos.lstrip()[:len(firma)] == firma


def decodificar(datos: bytes, origen: Optional[str] = None) -> str:
    """
    Decodifica los bytes de un documento a texto.

    Intenta UTF-8 y recurre a Latin-1, que nunca falla.

    Raises:
        BinaryFormatUnsupportedError: Si es un PDF binario
    """
    if es_pdf_binario(datos):
        raise BinaryFormatUnsupportedError(origen)

    try:
        return datos.decode("utf-8-sig")
    except UnicodeDecodeError:
        logger.debug("%s no es UTF-8, se decodifica como Latin-1", origen or "<buffer>")
        return datos.decode("latin-1")
