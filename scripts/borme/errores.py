"""
Errores del parser BORME.

Solo estos errores salen del núcleo de extracción. Cualquier otra anomalía
(patrones sin coincidencia, provincia ambigua, campos opcionales ausentes)
se absorbe como valor vacío y se registra en DEBUG.
"""


class BormeError(Exception):
    """Base de todos los errores del parser."""


class UnsupportedSectionError(BormeError):
    """Sección declarada distinta de A, B o C."""

    def __init__(self, seccion):
        self.seccion = seccion
        super().__init__(f"Sección no soportada: {seccion}")


class UnreadableSourceError(BormeError):
    """No se pudo abrir o leer la fuente del documento."""

    def __init__(self, origen, causa: Exception = None):
        self.origen = origen
        self.causa = causa
        mensaje = f"No se pudo leer la fuente: {origen}"
        if causa is not None:
            mensaje += f" ({causa})"
        super().__init__(mensaje)


class BinaryFormatUnsupportedError(BormeError):
    """Se recibió un PDF binario sin decodificar; se requiere texto."""

    def __init__(self, origen=None):
        self.origen = origen
        super().__init__(
            f"PDF binario no soportado{f': {origen}' if origen else ''}; "
            "se requiere el texto ya decodificado"
        )


class InvalidFilenameError(BormeError, ValueError):
    """El nombre de fichero no sigue la convención BORME-S-AAAA-MM-DD."""

    def __init__(self, nombre: str, motivo: str = "formato inválido"):
        self.nombre = nombre
        super().__init__(f"Nombre de fichero inválido ({motivo}): {nombre}")


class MalformedMarkupError(BormeError, ValueError):
    """El XML/HTML de la sección C no se pudo parsear."""
