"""
Punto de entrada del núcleo: clasifica un documento por sección y lo
envía al extractor correspondiente.

- Secciones A y B: misma gramática (ParserBorme)
- Sección C: XML o HTML según el prólogo
"""

import logging
from typing import List, Optional, Union

from .errores import BinaryFormatUnsupportedError
from .fuentes import crear_fuente, decodificar, es_pdf_binario
from .models import AnuncioC, Borme, Seccion
from .parser import ParserBorme
from .seccion_c import es_xml, parsear_c, parsear_multiples_c

logger = logging.getLogger(__name__)

__all__ = ["es_contenido", "es_xml", "leer_texto", "parsear", "parsear_anuncios_c"]


def es_contenido(origen) -> bool:
    """True si un str es el propio documento y no una ruta."""
    return isinstance(origen, str) and ("\n" in origen or origen.lstrip().startswith("<"))


def leer_texto(origen, filename: Optional[str] = None):
    """
    Lee y decodifica un origen.

    Un str con saltos de línea o que empieza por "<" es el texto del
    documento; cualquier otro str es una ruta.

    Returns:
        (texto, nombre): texto decodificado y nombre del fichero si se conoce

    Raises:
        BinaryFormatUnsupportedError: Si el contenido es un PDF binario
    """
    if es_contenido(origen):
        if es_pdf_binario(origen):
            raise BinaryFormatUnsupportedError(filename)
        return origen, filename

    fuente = crear_fuente(origen)
    nombre = filename or fuente.nombre
    return decodificar(fuente.leer(), nombre), nombre


def parsear(
    origen,
    seccion: Union[str, Seccion],
    filename: Optional[str] = None
) -> Union[Borme, AnuncioC]:
    """
    Parsea un documento del BORME.

    Args:
        origen: bytes, texto, ruta (str/Path) o Fuente. Un str solo se toma
            como texto si tiene saltos de línea o empieza por "<"; un
            documento de una sola línea debe pasarse como bytes o
            FuenteMemoria, o se leerá como ruta
        seccion: "A", "B" o "C" (sin distinguir mayúsculas) o Seccion
        filename: Nombre a registrar en el resultado

    Returns:
        Borme para A/B, AnuncioC para C

    Raises:
        UnsupportedSectionError: Sección desconocida
        UnreadableSourceError: No se puede leer el origen
        BinaryFormatUnsupportedError: PDF sin decodificar
        MalformedMarkupError: Sección C con marcado inválido
    """
    # Se valida antes de leer: una sección inválida no toca el origen
    seccion = Seccion.desde(seccion)
    texto, nombre = leer_texto(origen, filename)

    if seccion is Seccion.C:
        logger.debug("Sección C %s (%s)", nombre or "<buffer>", "XML" if es_xml(texto) else "HTML")
        return parsear_c(texto, nombre)

    return ParserBorme().parsear(texto, seccion, nombre)


def parsear_anuncios_c(origen, filename: Optional[str] = None) -> List[AnuncioC]:
    """Parsea un XML de sección C con varios anuncios."""
    texto, nombre = leer_texto(origen, filename)
    return parsear_multiples_c(texto, nombre)
