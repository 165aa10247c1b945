"""
Extractor de campos de la sección C del BORME (XML/HTML).

Para cada campo hay una lista ordenada de grafías alternativas de la
etiqueta; se usa el primer nodo encontrado con la primera grafía que
coincida (sin mezclar resultados). Los campos ausentes quedan con su
valor vacío.

- XML: xml.etree.ElementTree
- HTML: BeautifulSoup (html.parser), con un conjunto de campos más laxo
"""

import logging
import re
import xml.etree.ElementTree as ET
from datetime import date, datetime
from typing import List, Optional

from bs4 import BeautifulSoup, ParserRejectedMarkup

from .errores import MalformedMarkupError
from .models import AnuncioC

logger = logging.getLogger(__name__)


# =============================================================================
# CAMPOS
# =============================================================================

# Campo -> grafías alternativas de la etiqueta, por orden de preferencia
CAMPOS_XML = {
    "departamento": ("departamento", "Departamento", "department"),
    "texto": ("texto", "Texto", "announcement_text"),
    "diario_numero": ("diario_numero", "DiarioNumero", "nbo"),
    "numero_anuncio": ("numero_anuncio", "NumeroAnuncio", "num"),
    "id_anuncio": ("id_anuncio", "IdAnuncio", "id"),
    "cve": ("cve", "CVE", "verificacion"),
    "titulo": ("titulo", "Titulo", "title"),
    "empresa": ("empresa", "Empresa", "company"),
    "pagina_inicial": ("pagina_inicial", "PaginaInicial", "pagina"),
    "pagina_final": ("pagina_final", "PaginaFinal"),
    "fecha": ("fecha", "Fecha", "date"),
}

# Campos repetidos (find-all con las mismas reglas de alternativas)
CAMPOS_XML_MULTIPLES = {
    "empresas_relacionadas": (
        "empresa_relacionada", "relacionada", "related_company", "empresas_relacionadas",
    ),
    "cifs": ("cif", "CIF", "nif", "NIF"),
}

CAMPOS_ENTEROS = ("diario_numero", "pagina_inicial", "pagina_final")

# Nodos que contienen un anuncio en documentos con varios
ETIQUETAS_ANUNCIO = ("anuncio", "Anuncio", "announcement")

# Selectores CSS del HTML
SELECTORES_TITULO = ("h1", "h2", "h3", "title")
SELECTOR_TEXTO = "p, div.texto"
SELECTORES_EMPRESA = ("strong", "b", "span.empresa")

FORMATOS_FECHA = ("%Y-%m-%d", "%Y%m%d", "%d/%m/%Y")

PATRON_PROLOGO_XML = re.compile(r'<\?xml|<xml', re.IGNORECASE)

PATRON_ESPACIOS = re.compile(r'\s+')
PATRON_ESPACIO_PUNTUACION = re.compile(r' ([,.;:)])')


# =============================================================================
# FUNCIONES AUXILIARES
# =============================================================================

def es_xml(texto: str) -> bool:
    """True si el contenido declara un prólogo XML."""
    return bool(PATRON_PROLOGO_XML.search(texto))


def texto_nodo(nodo: ET.Element) -> str:
    """
    Texto completo de un nodo y sus descendientes.

    Los fragmentos se unen con un espacio, así dos párrafos hijos no
    quedan pegados. No queda espacio delante de la puntuación.
    """
    texto = PATRON_ESPACIOS.sub(" ", " ".join(nodo.itertext()))
    return PATRON_ESPACIO_PUNTUACION.sub(r"\1", texto).strip()


def buscar_primero(nodo: ET.Element, etiquetas) -> Optional[ET.Element]:
    """Primer descendiente que coincide con la primera etiqueta que exista."""
    for etiqueta in etiquetas:
        encontrado = nodo.find(f".//{etiqueta}")
        if encontrado is not None:
            return encontrado
    return None


def buscar_todos(nodo: ET.Element, etiquetas) -> List[ET.Element]:
    """Todos los descendientes de la primera etiqueta con coincidencias."""
    for etiqueta in etiquetas:
        encontrados = nodo.findall(f".//{etiqueta}")
        if encontrados:
            return encontrados
    return []


def _entero(texto: str) -> int:
    match = re.search(r'\d+', texto)
    return int(match.group()) if match else 0


def _fecha(texto: str) -> Optional[date]:
    for formato in FORMATOS_FECHA:
        try:
            return datetime.strptime(texto, formato).date()
        except ValueError:
            continue
    logger.debug("Fecha no reconocida: %s", texto)
    return None


def _parsear_arbol(texto: str) -> ET.Element:
    try:
        return ET.fromstring(texto)
    except ET.ParseError as e:
        raise MalformedMarkupError(f"XML mal formado: {e}") from e


# =============================================================================
# EXTRACCIÓN
# =============================================================================

def extraer_campos_xml(nodo: ET.Element, filename: Optional[str] = None) -> AnuncioC:
    """
    Extrae un anuncio de los descendientes de un nodo.

    Las consultas se limitan al subárbol del nodo, así que dos anuncios
    hermanos nunca comparten campos.
    """
    anuncio = AnuncioC(filename=filename)

    for campo, etiquetas in CAMPOS_XML.items():
        encontrado = buscar_primero(nodo, etiquetas)
        if encontrado is None:
            continue
        valor = texto_nodo(encontrado)

        if campo in CAMPOS_ENTEROS:
            setattr(anuncio, campo, _entero(valor))
        elif campo == "fecha":
            anuncio.fecha = _fecha(valor)
        else:
            setattr(anuncio, campo, valor)

    for campo, etiquetas in CAMPOS_XML_MULTIPLES.items():
        valores = [texto_nodo(n) for n in buscar_todos(nodo, etiquetas)]
        setattr(anuncio, campo, [v for v in valores if v])

    return anuncio


def parsear_xml(texto: str, filename: Optional[str] = None) -> AnuncioC:
    """
    Parsea un anuncio de la sección C en XML.

    Raises:
        MalformedMarkupError: Si el XML no es válido
    """
    return extraer_campos_xml(_parsear_arbol(texto), filename)


def parsear_html(texto: str, filename: Optional[str] = None) -> AnuncioC:
    """
    Parsea un anuncio de la sección C en HTML.

    Sin esquema fijo: título de los encabezados, cuerpo de los párrafos
    y empresa del primer texto en negrita.

    Raises:
        MalformedMarkupError: Si el parser HTML rechaza el contenido
    """
    try:
        soup = BeautifulSoup(texto, "html.parser")
    except ParserRejectedMarkup as e:
        raise MalformedMarkupError(f"HTML mal formado: {e}") from e

    anuncio = AnuncioC(filename=filename)

    for selector in SELECTORES_TITULO:
        nodo = soup.select_one(selector)
        if nodo is not None:
            anuncio.titulo = nodo.get_text(strip=True)
            break

    partes = [nodo.get_text(" ", strip=True) for nodo in soup.select(SELECTOR_TEXTO)]
    anuncio.texto = " ".join(p for p in partes if p).strip()

    for selector in SELECTORES_EMPRESA:
        nodo = soup.select_one(selector)
        if nodo is not None:
            anuncio.empresa = nodo.get_text(strip=True)
            break

    return anuncio


def parsear_c(texto: str, filename: Optional[str] = None) -> AnuncioC:
    """Parsea un anuncio de la sección C, eligiendo XML o HTML por el prólogo."""
    if es_xml(texto):
        return parsear_xml(texto, filename)
    return parsear_html(texto, filename)


def parsear_multiples_c(texto: str, filename: Optional[str] = None) -> List[AnuncioC]:
    """
    Parsea un XML con varios nodos de anuncio.

    Devuelve un registro por nodo (anuncio|Anuncio|announcement),
    cada uno extraído solo de sus propios descendientes.

    Raises:
        MalformedMarkupError: Si el XML no es válido
    """
    raiz = _parsear_arbol(texto)

    nodos: List[ET.Element] = []
    for etiqueta in ETIQUETAS_ANUNCIO:
        nodos = list(raiz.iter(etiqueta))
        if nodos:
            break

    anuncios = [extraer_campos_xml(nodo, filename) for nodo in nodos]
    logger.info("Sección C %s: %d anuncios", filename or "<texto>", len(anuncios))
    return anuncios
