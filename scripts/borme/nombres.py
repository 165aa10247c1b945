"""
Nombres de fichero del BORME: "<prefijo>-<sección>-<año>-<mes>-<día>[.pdf]".
"""

import re
from datetime import date
from pathlib import Path
from typing import NamedTuple

from .errores import InvalidFilenameError

PATRON_EXTENSION_PDF = re.compile(r'\.pdf$', re.IGNORECASE)


class DatosFichero(NamedTuple):
    fecha: date
    seccion: str
    numero: int      # día del año


def parsear_nombre_fichero(nombre) -> DatosFichero:
    """
    Extrae fecha, sección y número de un nombre de fichero.

    "BORME-A-2015-10-27.pdf" -> (2015-10-27, "A", 300)

    Se ignora el directorio. El número es el día del año de la fecha.

    Raises:
        InvalidFilenameError: Menos de cinco partes o fecha imposible
    """
    base = PATRON_EXTENSION_PDF.sub("", Path(str(nombre)).name)
    partes = base.split("-")
    if len(partes) < 5:
        raise InvalidFilenameError(str(nombre))

    seccion = partes[1]
    try:
        anio, mes, dia = int(partes[2]), int(partes[3]), int(partes[4])
    except ValueError:
        raise InvalidFilenameError(str(nombre), "fecha no numérica") from None

    try:
        fecha = date(anio, mes, dia)
    except ValueError:
        raise InvalidFilenameError(str(nombre), "fecha imposible") from None

    return DatosFichero(fecha=fecha, seccion=seccion, numero=fecha.timetuple().tm_yday)
