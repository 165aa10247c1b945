"""
Clasificador de actos.

Decide cómo el texto crudo de un acto reconocido se convierte en
un registro tipado (ActoTexto o ActoCargo).
"""

from enum import Enum
from typing import Optional

from .models import Acto, ActoCargo, ActoTexto
from .patrones import (
    es_acto_cargo,
    es_acto_colon,
    es_acto_negrita,
    es_acto_sin_argumento,
    normalizar_nombre_acto,
    parsear_cargos,
)


class ClaseActo(Enum):
    """Clase de un nombre de acto según los conjuntos de la biblioteca de patrones."""
    CARGO = "cargo"
    SIN_ARGUMENTO = "sin_argumento"
    ARGUMENTO_COLON = "argumento_colon"
    NEGRITA = "negrita"
    GENERICO = "generico"


def tipo_de_acto(nombre: str) -> ClaseActo:
    """Clase del acto. Los conjuntos son disjuntos, el orden no altera el resultado."""
    if es_acto_cargo(nombre):
        return ClaseActo.CARGO
    if es_acto_sin_argumento(nombre):
        return ClaseActo.SIN_ARGUMENTO
    if es_acto_colon(nombre):
        return ClaseActo.ARGUMENTO_COLON
    if es_acto_negrita(nombre):
        return ClaseActo.NEGRITA
    return ClaseActo.GENERICO


def clasificar_acto(nombre: str, valor: Optional[str]) -> Acto:
    """
    Convierte (nombre, valor crudo) en un acto tipado.

    - Actos de cargo: el valor se parsea como "<cargo>: <p1>;<p2>..."
      y se devuelve un ActoCargo (sin cargos vacíos).
    - Resto de clases: ActoTexto con el valor recortado. Las gramáticas
      sin argumento, con dos puntos y en negrita producen la misma forma.

    Nunca lanza: un valor sin cargos reconocibles da un ActoCargo vacío.
    """
    nombre = normalizar_nombre_acto(nombre)
    texto = valor.strip() if valor else ""

    if tipo_de_acto(nombre) is ClaseActo.CARGO:
        return ActoCargo(nombre=nombre, valor=parsear_cargos(texto))

    return ActoTexto(nombre=nombre, valor=texto or None)
