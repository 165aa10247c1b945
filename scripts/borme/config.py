"""
Configuración del parser y de los scripts de descarga/procesado.

Marcadores literales del texto decodificado del PDF, plantillas de URL
del BOE y parámetros de red.
"""

from pathlib import Path

# =============================================================================
# MARCADORES DEL TEXTO (SECCIONES A/B)
# =============================================================================

# Fuentes del PDF: /F1 negrita (nombre del acto), /F2 normal (valor del acto)
FUENTE_NEGRITA = "/F1"
FUENTE_NORMAL = "/F2"

# Prefijos que fijan el número de boletín sin importar el modo actual.
# "NÃºm." aparece cuando el texto UTF-8 se decodificó como Latin-1.
PREFIJOS_NUMERO = ("Núm.", "Num.", "NÃºm.")

# Prefijo del código de verificación electrónica
PREFIJO_CVE = "cve:"

# Nombre de acto cuyo valor va a Anuncio.datos_registrales
ACTO_DATOS_REGISTRALES = "Datos registrales"

# Secciones por título del boletín
SECCIONES_POR_TITULO = {
    "PRIMERA": "A",
    "SEGUNDA": "B",
    "TERCERA": "C",
}

# Marcadores del PDF que indican texto sin decodificar
FIRMA_PDF_BINARIO = b"%PDF"

# =============================================================================
# DESCARGA (SOLO SCRIPTS)
# =============================================================================

URL_BASE = "https://www.boe.es"

URLS = {
    "sumario": URL_BASE + "/diario_borme/xml.php?id=BORME-S-{anio}{mes:02d}{dia:02d}",
    "pdf_ab": URL_BASE + "/borme/dias/{anio}/{mes:02d}/{dia:02d}/pdfs/"
              "BORME-{seccion}-{anio}-{nbo}-{provincia}.pdf",
    "c_htm": URL_BASE + "/diario_borme/txt.php?id=BORME-C-{anio}-{anuncio}",
    "c_pdf": URL_BASE + "/borme/dias/{anio}/{mes:02d}/{dia:02d}/pdfs/"
             "BORME-C-{anio}-{anuncio}.pdf",
    "c_xml": URL_BASE + "/diario_borme/xml.php?id=BORME-C-{anio}-{anuncio}",
}

USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

# Configuración de red
TIMEOUT = 30
MAX_RETRIES = 3
DELAY_ENTRE_REQUESTS = 1  # segundos

# Paralelismo de descargas y procesado por lotes
THREADS = 8
WORKERS_DEFECTO = 4

# Directorios por defecto
BASE_DIR = Path(__file__).parent.parent.parent / "doc" / "borme"
LOGS_DIR = BASE_DIR / "logs"
DESCARGAS_DIR = BASE_DIR / "descargas"

# Extensiones que procesa el modo directorio
EXTENSIONES_PROCESABLES = (".txt", ".pdf", ".xml", ".html", ".htm")
