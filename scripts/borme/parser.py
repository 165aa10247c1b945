"""
Parser de las secciones A y B del BORME.

Recorre el texto decodificado del PDF línea a línea con una máquina de
estados. El modo actual cambia al encontrar marcadores literales:

- "Cabecera"  -> CABECERA: líneas "<id> - <empresa>[(R.M. <registro>)]"
- "Texto"     -> TEXTO: actos; /F1 (negrita) nombre, /F2 (normal) valor
- "Fecha"     -> FECHA: "Martes 27 de octubre de 2015"
- "Número"    -> NUMERO, "Sección" -> SECCION, "Provincia" -> PROVINCIA,
  "CVE" -> CVE

Las líneas que empiezan por "Núm." fijan el número de boletín y las que
empiezan por "cve:" el código de verificación, en cualquier modo.

Las líneas no reconocidas se ignoran: un boletín incompleto produce
un resultado parcial, nunca un error.
"""

import logging
from enum import Enum
from typing import Optional, Tuple

from .clasificador import ClaseActo, clasificar_acto, tipo_de_acto
from .config import (
    ACTO_DATOS_REGISTRALES,
    FUENTE_NEGRITA,
    FUENTE_NORMAL,
    PREFIJO_CVE,
    PREFIJOS_NUMERO,
    SECCIONES_POR_TITULO,
)
from .models import Anuncio, Borme, Seccion
from .patrones import (
    PATRON_CVE,
    PATRON_CVE_SOLO,
    PATRON_NUMERO_BORME,
    buscar_provincia,
    en_liquidacion,
    es_sucursal,
    limpiar_texto_pdf,
    normalizar_nombre_acto,
    parsear_acto_negrita,
    parsear_empresa,
    parsear_fecha,
    plegar,
)

logger = logging.getLogger(__name__)


class Modo(Enum):
    """Modo de la máquina de estados."""
    NEUTRO = "neutro"
    CABECERA = "cabecera"
    TEXTO = "texto"
    FECHA = "fecha"
    NUMERO = "numero"
    SECCION = "seccion"
    PROVINCIA = "provincia"
    CVE = "cve"


# Marcador literal -> modo. Se comprueban en este orden; gana el primero.
TRANSICIONES: Tuple[Tuple[str, Modo], ...] = (
    ("Cabecera", Modo.CABECERA),
    ("Texto", Modo.TEXTO),
    ("Fecha", Modo.FECHA),
    ("Número", Modo.NUMERO),
    ("Sección", Modo.SECCION),
    ("Seccion", Modo.SECCION),
    ("Provincia", Modo.PROVINCIA),
    ("CVE", Modo.CVE),
)

_DATOS_REGISTRALES = plegar(ACTO_DATOS_REGISTRALES)


def extraer_tras_fuente(linea: str, fuente: str) -> str:
    """
    Texto que sigue a un marcador de fuente, sin el operador Tj.

    "/F1 (Nombramientos.) Tj" -> "(Nombramientos.)Tj" listo para limpiar.
    """
    idx = linea.find(fuente)
    if idx == -1:
        return ""
    texto = linea[idx + len(fuente):].strip()
    if texto.endswith("Tj"):
        texto = texto[:-2].rstrip() + "Tj"
    return texto


def _transicion(linea: str) -> Optional[Modo]:
    for marcador, modo in TRANSICIONES:
        if marcador in linea:
            return modo
    return None


# =============================================================================
# PARSER BORME A/B
# =============================================================================

class ParserBorme:
    """
    Parser de boletines de las secciones A/B.

    Cada llamada a parsear() reinicia el estado, así que una instancia
    puede reutilizarse pero no compartirse entre hilos.

    Usage:
        parser = ParserBorme()
        borme = parser.parsear(texto, Seccion.A, filename="BORME-A-2015-205-28.txt")
    """

    def __init__(self):
        self._reset()

    def _reset(self, seccion: Seccion = Seccion.A, filename: Optional[str] = None):
        """Reinicia el estado del parser."""
        self.borme = Borme(seccion=seccion, filename=filename)
        self.modo = Modo.NEUTRO
        self.anuncio_actual: Optional[Anuncio] = None
        self.acto_pendiente: Optional[str] = None
        self.total_anuncios = 0

    def parsear(
        self,
        texto: str,
        seccion=Seccion.A,
        filename: Optional[str] = None
    ) -> Borme:
        """
        Parsea el texto de un boletín.

        Args:
            texto: Texto ya decodificado del PDF
            seccion: Sección declarada (A o B)
            filename: Nombre del fichero fuente, si se conoce

        Returns:
            Borme con anuncios en orden de aparición y rango calculado
        """
        self._reset(Seccion.desde(seccion), filename)

        for numero_linea, linea in enumerate(texto.splitlines(), 1):
            linea = linea.strip()
            if not linea:
                continue
            self._procesar_linea(linea, numero_linea)

        self._cerrar_acto_pendiente()
        self.borme.calcular_rango()

        logger.info(
            "Boletín %s parseado: %d anuncios",
            filename or self.borme.cve or "<texto>",
            len(self.borme.anuncios),
        )
        return self.borme

    # -------------------------------------------------------------------------
    # Despacho por línea
    # -------------------------------------------------------------------------

    def _procesar_linea(self, linea: str, numero_linea: int):
        # Spans de fuente: contenido del acto, nunca marcadores de modo
        if self.modo is Modo.TEXTO:
            if linea.startswith(FUENTE_NEGRITA):
                self._procesar_negrita(extraer_tras_fuente(linea, FUENTE_NEGRITA))
                return
            if linea.startswith(FUENTE_NORMAL):
                self._procesar_normal(extraer_tras_fuente(linea, FUENTE_NORMAL))
                return

        # === NÚMERO DE BOLETÍN ===
        if linea.startswith(PREFIJOS_NUMERO):
            match = PATRON_NUMERO_BORME.match(linea)
            if match:
                self.borme.num = int(match.group(1))
            return

        # === CVE ===
        if linea.lower().startswith(PREFIJO_CVE):
            match = PATRON_CVE.match(linea)
            if match:
                self.borme.cve = match.group(1).strip()
            else:
                self._cambiar_modo(Modo.CVE)
            return

        # === MARCADORES DE MODO ===
        modo = _transicion(linea)
        if modo is not None:
            self._cambiar_modo(modo)
            return

        # === CONTENIDO SEGÚN MODO ===
        if self.modo is Modo.CABECERA:
            self._procesar_cabecera(linea)
        elif self.modo is Modo.TEXTO:
            self._procesar_texto(linea)
        elif self.modo is Modo.FECHA:
            self._procesar_fecha(linea)
        elif self.modo is Modo.NUMERO:
            self._procesar_numero(linea)
        elif self.modo is Modo.SECCION:
            self._procesar_seccion(linea)
        elif self.modo is Modo.PROVINCIA:
            self._procesar_provincia(linea)
        elif self.modo is Modo.CVE:
            self._procesar_cve(linea)
        else:
            logger.debug("Línea %d ignorada: %s", numero_linea, linea[:80])

    def _cambiar_modo(self, modo: Modo):
        """Cambia de modo. Salir de TEXTO o abrir cabecera cierra el acto pendiente."""
        if self.modo is Modo.TEXTO or modo is Modo.CABECERA:
            self._cerrar_acto_pendiente()
        self.modo = modo

    # -------------------------------------------------------------------------
    # Cabecera y actos
    # -------------------------------------------------------------------------

    def _procesar_cabecera(self, linea: str):
        """Abre un anuncio nuevo si la línea es "<id> - <empresa>"."""
        for fuente in (FUENTE_NEGRITA, FUENTE_NORMAL):
            if linea.startswith(fuente):
                linea = extraer_tras_fuente(linea, fuente)
        linea = limpiar_texto_pdf(linea)

        if " - " not in linea:
            return

        id_texto, empresa, registro = parsear_empresa(linea)
        if not id_texto:
            return

        # El id del texto se descarta: el id es el orden de aparición
        self.total_anuncios += 1
        self.anuncio_actual = Anuncio(
            id=self.total_anuncios,
            empresa=empresa,
            registro=registro,
            sucursal=es_sucursal(empresa),
            liquidacion=en_liquidacion(empresa),
        )
        self.borme.agregar_anuncio(self.anuncio_actual)

    def _procesar_negrita(self, texto: str):
        """Span en negrita: nombre de acto, o "Nombre: valor" completo."""
        texto = limpiar_texto_pdf(texto)
        if not texto:
            return

        self._cerrar_acto_pendiente()

        nombre, valor = parsear_acto_negrita(texto)
        if nombre and valor:
            self._emitir_acto(nombre, valor)
        else:
            self.acto_pendiente = texto

    def _procesar_normal(self, texto: str):
        """Span normal: valor del acto pendiente."""
        texto = limpiar_texto_pdf(texto)
        if self.acto_pendiente is None:
            if texto:
                logger.debug("Valor sin acto pendiente ignorado: %s", texto[:80])
            return
        self._finalizar_acto(texto)

    def _procesar_texto(self, linea: str):
        """Línea sin marcador de fuente en modo TEXTO."""
        if self.acto_pendiente is not None:
            self._finalizar_acto(limpiar_texto_pdf(linea))

    def _finalizar_acto(self, valor: str):
        """Emite el acto pendiente con su valor. Un valor vacío no lo cierra."""
        if not valor:
            return
        nombre = self.acto_pendiente
        self.acto_pendiente = None
        self._emitir_acto(nombre, valor)

    def _cerrar_acto_pendiente(self):
        """
        Cierra un acto que se quedó sin valor.

        Los actos sin argumento se emiten sin valor; el resto se descarta.
        """
        if self.acto_pendiente is None:
            return

        nombre = self.acto_pendiente
        self.acto_pendiente = None
        if tipo_de_acto(nombre) is ClaseActo.SIN_ARGUMENTO:
            self._emitir_acto(nombre, None)
        else:
            logger.debug("Acto sin valor descartado: %s", nombre)

    def _emitir_acto(self, nombre: str, valor: Optional[str]):
        if self.anuncio_actual is None:
            logger.debug("Acto fuera de anuncio descartado: %s", nombre)
            return

        if plegar(normalizar_nombre_acto(nombre)) == _DATOS_REGISTRALES:
            self.anuncio_actual.datos_registrales = (valor or "").strip() or None
            return

        self.anuncio_actual.agregar_acto(clasificar_acto(nombre, valor))

    # -------------------------------------------------------------------------
    # Metadatos del boletín
    # -------------------------------------------------------------------------

    def _procesar_fecha(self, linea: str):
        fecha = parsear_fecha(limpiar_texto_pdf(linea))
        if fecha is not None:
            self.borme.fecha = fecha
            self.modo = Modo.NEUTRO

    def _procesar_numero(self, linea: str):
        texto = limpiar_texto_pdf(linea)
        if texto.isdigit():
            self.borme.num = int(texto)
            self.modo = Modo.NEUTRO

    def _procesar_seccion(self, linea: str):
        texto = plegar(limpiar_texto_pdf(linea))
        letra = texto if texto in ("A", "B", "C") else None
        if letra is None:
            for ordinal, valor in SECCIONES_POR_TITULO.items():
                if ordinal in texto:
                    letra = valor
                    break
        if letra is not None:
            self.borme.seccion = Seccion(letra)
            self.modo = Modo.NEUTRO

    def _procesar_provincia(self, linea: str):
        provincia = buscar_provincia(limpiar_texto_pdf(linea))
        if provincia is not None:
            self.borme.provincia = provincia
            self.modo = Modo.NEUTRO

    def _procesar_cve(self, linea: str):
        texto = limpiar_texto_pdf(linea)
        match = PATRON_CVE.match(texto) or PATRON_CVE_SOLO.match(texto)
        if match:
            self.borme.cve = match.group(1).strip()
            self.modo = Modo.NEUTRO
