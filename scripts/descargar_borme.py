#!/usr/bin/env python3
"""
Descargador del BORME (Boletín Oficial del Registro Mercantil)
Fuente oficial: BOE (https://www.boe.es)

- Sumario diario en XML (número de boletín y anuncios)
- PDFs de las secciones A/B por provincia
- Anuncios de la sección C (XML, HTML o PDF)

El parser no descarga nada; este script solo deja los ficheros en disco.

Uso:
    python descargar_borme.py --start-date 2015-10-27 --end-date 2015-10-30 --seccion A --provincia Madrid
"""

import argparse
import logging
import sys
import threading
import time
import xml.etree.ElementTree as ET
from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import List, Optional, Tuple
from urllib.parse import urljoin

import requests
from tenacity import (
    retry, stop_after_attempt, wait_exponential,
    retry_if_exception, before_sleep_log
)
from tqdm import tqdm

# Agregar path para imports
sys.path.insert(0, str(Path(__file__).parent))

from borme.config import (
    DELAY_ENTRE_REQUESTS,
    DESCARGAS_DIR,
    MAX_RETRIES,
    THREADS,
    TIMEOUT,
    URL_BASE,
    URLS,
    USER_AGENT,
)
from borme.errores import MalformedMarkupError
from borme.models import PROVINCIAS, Provincia, Seccion
from borme.patrones import buscar_provincia
from borme.registro import setup_logging

logger = logging.getLogger("borme.descarga")


# ============================================================================
# URLS
# ============================================================================

def url_sumario(fecha: date) -> str:
    """URL del sumario XML del día."""
    return URLS["sumario"].format(anio=fecha.year, mes=fecha.month, dia=fecha.day)


def url_pdf(fecha: date, seccion, nbo: int, provincia: Provincia) -> str:
    """URL del PDF de una sección A/B para una provincia."""
    return URLS["pdf_ab"].format(
        anio=fecha.year, mes=fecha.month, dia=fecha.day,
        seccion=Seccion.desde(seccion).value,
        nbo=nbo,
        provincia=f"{provincia.codigo:02d}",
    )


def url_seccion_c(fecha: date, anuncio: str, formato: str = "xml") -> str:
    """
    URL de un anuncio de la sección C.

    Args:
        anuncio: Número del anuncio en el año (ej: "10501")
        formato: "xml", "htm" o "pdf"
    """
    clave = f"c_{formato}"
    if clave not in URLS:
        raise ValueError(f"Formato de sección C no soportado: {formato}")
    return URLS[clave].format(anio=fecha.year, mes=fecha.month, dia=fecha.day, anuncio=anuncio)


def normalizar_provincia(valor: str) -> Optional[Provincia]:
    """Provincia por código INE ("28", "8") o por nombre ("Madrid", "Vizcaya")."""
    valor = valor.strip()
    if valor.isdigit():
        codigo = int(valor)
        for provincia in PROVINCIAS:
            if provincia.codigo == codigo:
                return provincia
        return None
    return buscar_provincia(valor)


def rango_fechas(inicio: date, fin: date) -> List[date]:
    """Fechas de inicio a fin, ambas incluidas."""
    dias = (fin - inicio).days
    return [inicio + timedelta(days=i) for i in range(dias + 1)]


# ============================================================================
# SUMARIO
# ============================================================================

def parsear_sumario(datos) -> Tuple[int, List[str]]:
    """
    Parsea el sumario diario.

    <diario><nbo>205</nbo><seccion letra="C"><empresa><urlcve>...</urlcve>...

    Returns:
        (nbo, urls): número de boletín y URLs de verificación de los anuncios
        (absolutas), en orden de aparición

    Raises:
        MalformedMarkupError: Si el XML no es válido
    """
    try:
        raiz = ET.fromstring(datos)
    except ET.ParseError as e:
        raise MalformedMarkupError(f"Sumario mal formado: {e}") from e

    texto_nbo = (raiz.findtext("nbo") or "").strip()
    nbo = int(texto_nbo) if texto_nbo.isdigit() else 0

    urls = []
    for seccion in raiz.findall("seccion"):
        for empresa in seccion.findall("empresa"):
            url_cve = (empresa.findtext("urlcve") or "").strip()
            if url_cve:
                urls.append(urljoin(URL_BASE, url_cve))

    return nbo, urls


# ============================================================================
# DESCARGA CON REINTENTOS
# ============================================================================

def get_session() -> requests.Session:
    """Crea una sesión HTTP configurada."""
    session = requests.Session()
    session.headers.update({
        "User-Agent": USER_AGENT,
        "Accept": "application/xml,text/html,application/pdf;q=0.9,*/*;q=0.8",
        "Accept-Language": "es-ES,es;q=0.9,en;q=0.8",
    })
    return session


def es_reintentable(error: BaseException) -> bool:
    """Errores de red y respuestas 5xx. Un 4xx (día sin boletín) no se reintenta."""
    if isinstance(error, requests.HTTPError):
        return error.response is not None and error.response.status_code >= 500
    return isinstance(error, (requests.ConnectionError, requests.Timeout))


class DescargadorBorme:
    """Descargador con reintentos, backoff exponencial y rate limit compartido entre hilos."""

    def __init__(self, session: Optional[requests.Session] = None):
        self.session = session or get_session()
        self.last_request_time = 0.0
        self._lock = threading.Lock()

    def _esperar_rate_limit(self):
        """Espera entre requests para no saturar el servidor."""
        with self._lock:
            elapsed = time.time() - self.last_request_time
            if elapsed < DELAY_ENTRE_REQUESTS:
                time.sleep(DELAY_ENTRE_REQUESTS - elapsed)
            self.last_request_time = time.time()

    @retry(
        stop=stop_after_attempt(MAX_RETRIES),
        wait=wait_exponential(multiplier=1, min=1, max=30),
        retry=retry_if_exception(es_reintentable),
        before_sleep=before_sleep_log(logger, logging.DEBUG),
        reraise=True,
    )
    def descargar(self, url: str) -> bytes:
        """Descarga una URL con reintentos."""
        self._esperar_rate_limit()
        logger.debug(f"GET: {url}")

        response = self.session.get(url, timeout=TIMEOUT, allow_redirects=True)
        response.raise_for_status()
        return response.content

    def descargar_seguro(self, url: str) -> Optional[bytes]:
        """Descarga con manejo de errores, retorna None si falla."""
        try:
            return self.descargar(url)
        except Exception as e:
            logger.warning(f"Error descargando {url}: {e}")
            return None

    def guardar(self, url: str, destino: Path) -> Optional[Path]:
        """Descarga a fichero. Si ya existe no se vuelve a descargar."""
        if destino.exists():
            logger.debug(f"Ya existe: {destino.name}")
            return destino

        datos = self.descargar_seguro(url)
        if datos is None:
            return None

        destino.parent.mkdir(parents=True, exist_ok=True)
        destino.write_bytes(datos)
        return destino


# ============================================================================
# DESCARGA POR DÍA
# ============================================================================

def nombre_fichero_c(url: str) -> str:
    """Nombre local de un anuncio C a partir de su URL (id=BORME-C-2015-10501)."""
    if "id=" in url:
        return url.split("id=", 1)[1].split("&", 1)[0] + ".xml"
    return url.rstrip("/").rsplit("/", 1)[-1]


def descargar_dia(
    descargador: DescargadorBorme,
    fecha: date,
    seccion,
    destino: Path,
    provincia: Optional[Provincia] = None
) -> List[Path]:
    """
    Descarga los documentos de un día.

    A/B: un PDF por provincia (todas si no se indica una).
    C: los anuncios listados en el sumario.

    Returns:
        Ficheros descargados (o ya existentes)
    """
    seccion = Seccion.desde(seccion)

    datos = descargador.descargar_seguro(url_sumario(fecha))
    if datos is None:
        logger.info(f"{fecha}: sin sumario (festivo o no publicado)")
        return []

    try:
        nbo, urls_c = parsear_sumario(datos)
    except MalformedMarkupError as e:
        logger.warning(f"{fecha}: {e}")
        return []

    dir_dia = destino / fecha.strftime("%Y") / fecha.strftime("%m") / fecha.strftime("%d")

    if seccion is Seccion.C:
        tareas = [(url, dir_dia / nombre_fichero_c(url)) for url in urls_c]
    else:
        provincias = [provincia] if provincia else list(PROVINCIAS)
        tareas = []
        for prov in provincias:
            url = url_pdf(fecha, seccion, nbo, prov)
            tareas.append((url, dir_dia / url.rsplit("/", 1)[-1]))

    with ThreadPoolExecutor(max_workers=THREADS) as executor:
        resultados = list(executor.map(lambda t: descargador.guardar(*t), tareas))

    descargados = [r for r in resultados if r is not None]
    logger.debug(f"{fecha}: {len(descargados)}/{len(tareas)} ficheros (BORME {nbo})")
    return descargados


# ============================================================================
# MAIN
# ============================================================================

def _fecha_arg(valor: str) -> date:
    try:
        return datetime.strptime(valor, "%Y-%m-%d").date()
    except ValueError:
        raise argparse.ArgumentTypeError(f"Fecha inválida (AAAA-MM-DD): {valor}")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Descarga boletines del BORME por rango de fechas")
    parser.add_argument("--start-date", type=_fecha_arg, required=True, help="Fecha inicial (AAAA-MM-DD)")
    parser.add_argument("--end-date", type=_fecha_arg, required=True, help="Fecha final (AAAA-MM-DD)")
    parser.add_argument("--seccion", default="A", type=str.upper, choices=("A", "B", "C"), help="Sección")
    parser.add_argument("--provincia", default="", help="Código INE o nombre (ej: 28, Madrid)")
    parser.add_argument("--download-dir", type=Path, default=DESCARGAS_DIR, help="Directorio de descarga")
    args = parser.parse_args(argv)

    setup_logging("descarga")

    if args.end_date < args.start_date:
        logger.error("La fecha final es anterior a la inicial")
        return 1

    provincia = None
    if args.provincia:
        provincia = normalizar_provincia(args.provincia)
        if provincia is None:
            logger.error(f"Provincia desconocida: {args.provincia}")
            return 1

    seccion = Seccion.desde(args.seccion)
    fechas = rango_fechas(args.start_date, args.end_date)

    logger.info("=" * 60)
    logger.info(f"BORME {seccion.value}: {args.start_date} a {args.end_date} ({len(fechas)} días)")
    if provincia:
        logger.info(f"Provincia: {provincia.nombre} ({provincia.codigo:02d})")
    logger.info(f"Directorio: {args.download_dir}")
    logger.info("=" * 60)

    descargador = DescargadorBorme()
    total = 0
    for fecha in tqdm(fechas, desc="Descargando", unit="día"):
        total += len(descargar_dia(descargador, fecha, seccion, args.download_dir, provincia))

    logger.info(f"COMPLETADO: {total} ficheros en {args.download_dir}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
