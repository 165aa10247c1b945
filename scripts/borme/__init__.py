"""
Módulo de parseo del BORME (Boletín Oficial del Registro Mercantil)

Arquitectura en 3 fases:
1. Lectura: Obtener y decodificar los bytes (fichero o buffer)
2. Parsing: Máquina de estados para A/B, consulta de campos XML/HTML para C
3. Output: Registros tipados serializables a JSON
"""

from .errores import (
    BormeError,
    UnsupportedSectionError,
    UnreadableSourceError,
    BinaryFormatUnsupportedError,
    InvalidFilenameError,
    MalformedMarkupError,
)
from .models import (
    Seccion,
    TipoActo,
    Provincia,
    PROVINCIAS,
    ActoTexto,
    ActoCargo,
    Anuncio,
    Borme,
    AnuncioC,
)
from .fuentes import Fuente, FuenteArchivo, FuenteMemoria, crear_fuente
from .clasificador import ClaseActo, clasificar_acto, tipo_de_acto
from .parser import ParserBorme
from .seccion_c import parsear_c, parsear_multiples_c
from .documento import es_xml, parsear, parsear_anuncios_c
from .nombres import DatosFichero, parsear_nombre_fichero
from .serializar import a_dict, a_json

__all__ = [
    # Errores
    'BormeError',
    'UnsupportedSectionError',
    'UnreadableSourceError',
    'BinaryFormatUnsupportedError',
    'InvalidFilenameError',
    'MalformedMarkupError',
    # Models
    'Seccion',
    'TipoActo',
    'Provincia',
    'PROVINCIAS',
    'ActoTexto',
    'ActoCargo',
    'Anuncio',
    'Borme',
    'AnuncioC',
    # Fuentes
    'Fuente',
    'FuenteArchivo',
    'FuenteMemoria',
    'crear_fuente',
    # Clasificador
    'ClaseActo',
    'clasificar_acto',
    'tipo_de_acto',
    # Parser
    'ParserBorme',
    'parsear_c',
    'parsear_multiples_c',
    'es_xml',
    'parsear',
    'parsear_anuncios_c',
    # Nombres de fichero
    'DatosFichero',
    'parsear_nombre_fichero',
    # Serialización
    'a_dict',
    'a_json',
]
