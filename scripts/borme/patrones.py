"""
Biblioteca de patrones del BORME.

Contiene:
- Patrones regex de cabeceras de empresa, fechas, número y CVE
- Conjuntos estáticos de nombres de actos (cargo, sin argumento,
  argumento con dos puntos, negrita)
- Gramáticas de texto: cargos, fechas en español, actos en negrita
- Limpieza de artefactos del PDF

Ninguna función lanza excepciones con entrada mal formada: si el
patrón no coincide se devuelve un valor vacío (dict vacío, "", None).
"""

import re
from datetime import date
from typing import Dict, FrozenSet, List, Optional, Tuple

from unidecode import unidecode

from .models import PROVINCIAS, Provincia


# =============================================================================
# PATRONES REGEX
# =============================================================================

# Empresa: "57344 - ALDARA CATERING SL"
PATRON_EMPRESA = re.compile(r'^(\d+) - (.*?)\.?$')

# Empresa con registro: "57344 - ALDARA CATERING SL(R.M. Madrid)"
PATRON_EMPRESA_REGISTRO = re.compile(r'^(\d+) - (.*)\(R\.M\. (.*)\)\.?$')

# Texto crudo del PDF: "(Constitución)Tj"
PATRON_PDF_TEXTO = re.compile(r'^\((.*)\)\s*Tj$')

# Número de boletín: "Núm. 205"
PATRON_NUMERO_BORME = re.compile(r'^(?:Núm|Num|NÃºm)\.\s*(\d+)')

# Fecha: "Martes 27 de octubre de 2015"
PATRON_FECHA = re.compile(
    r'^(\S+?),?\s+(\d{1,2})\s+de\s+(\S+)\s+de\s+(\d{4})',
    re.IGNORECASE
)

# CVE: "cve: BORME-A-2015-205-28"
PATRON_CVE = re.compile(r'^cve:\s*(\S.*)$', re.IGNORECASE)

# CVE sin prefijo: "BORME-A-2015-205-28"
PATRON_CVE_SOLO = re.compile(r'^(BORME-[A-Z]-\d{4}-\d+(?:-\d+)?)$')

# Acto con argumento tras dos puntos: "Capital: 3.000,00 Euros"
PATRON_ARG_COLON = re.compile(r'^(.*?):\s*(.*)$', re.DOTALL)

# Acto sin argumento
PATRON_SIN_ARG = re.compile(r'^(.+)$', re.DOTALL)

# Acto en negrita con argumento (el valor no puede ser vacío)
PATRON_NEGRITA = re.compile(r'^(.*?):\s*(.+)$', re.DOTALL)

# Palabra de un cargo: "Consejero", "Adm.", "M." (inicial con punto), "LiquiSoli"
_PALABRA_CARGO = r'[A-ZÁÉÍÓÚÑ](?:[a-záéíóúñü]+|(?=\.))\.?'

# Cargo: "Adm. Solid.:", "M.Consejo:". Solo al inicio o tras ".",
# y nunca dentro de una abreviatura como "S.L."
PATRON_CARGO = re.compile(
    r'(?:^|(?<=\.))\s*(?<!\b[A-ZÁÉÍÓÚÑ]\.)'
    r'(' + _PALABRA_CARGO +
    r'(?:[\s/]*' + _PALABRA_CARGO + r'|\s+(?:de|del|la|y)(?=\s))*)'
    r'\s*:'
)

# Separador de personas dentro de un cargo
PATRON_SEPARADOR_PERSONAS = re.compile(r';\s*')

# Abreviaturas que terminan en punto y no deben recortarse ("S.L.", "S.A.")
PATRON_ABREVIATURA_FINAL = re.compile(r'(?:\b\w\.){2,}$')


# =============================================================================
# CONJUNTOS DE ACTOS
# =============================================================================

# Actos cuyo valor es una lista de cargos con personas
ACTOS_CARGO: FrozenSet[str] = frozenset({
    "Nombramientos",
    "Nombramiento",
    "Revocaciones",
    "Ceses/Dimisiones",
    "Reelecciones",
    "Cancelaciones de oficio de nombramientos",
    "Socio único",
    "Socio profesional",
    "Otro cargo",
})

# Actos que no llevan argumento
ACTOS_SIN_ARGUMENTO: FrozenSet[str] = frozenset({
    "Crédito incobrable",
    "Sociedad unipersonal",
    "Extinción",
    "Cuadro de cargos",
    "Cambio de objeto social",
    "Pérdida del caracter de unipersonalidad",
    "Reapertura hoja registral",
    "Empresario individual",
    "Otro acto",
})

# Actos con argumento tras dos puntos
ACTOS_ARGUMENTO_COLON: FrozenSet[str] = frozenset({
    "Modificación de duración",
    "Fe de erratas",
    "Domicilio",
    "Objeto",
    "Capital",
    "Estatutos",
    "Denominación",
    "Ampliación de capital",
    "Reducción de capital",
    "Cambio de domicilio social",
    "Cambio de denominación social",
    "Modificaciones estatutarias",
    "Otros conceptos",
})

# Actos que aparecen en negrita con su argumento
ACTOS_NEGRITA: FrozenSet[str] = frozenset({
    "Declaración de unipersonalidad",
    "Escisión total",
    "Escisión parcial",
    "Fusión",
    "Fusión por absorción",
    "Transformación de sociedad",
})

# Sufijos de forma jurídica (se comparan en mayúsculas)
SUFIJOS_SOCIEDAD = (
    " SL", " S.L.", " SLU", " S.L.U.", " SLL", " S.L.L.", " SLP", " S.L.P.",
    " SA", " S.A.", " SAU", " S.A.U.", " SAL", " S.A.L.",
)

DIAS_SEMANA = frozenset({
    "LUNES", "MARTES", "MIERCOLES", "JUEVES", "VIERNES", "SABADO", "DOMINGO",
})

MESES = {
    "ENERO": 1,
    "FEBRERO": 2,
    "MARZO": 3,
    "ABRIL": 4,
    "MAYO": 5,
    "JUNIO": 6,
    "JULIO": 7,
    "AGOSTO": 8,
    "SEPTIEMBRE": 9,
    "SETIEMBRE": 9,
    "OCTUBRE": 10,
    "NOVIEMBRE": 11,
    "DICIEMBRE": 12,
}


# =============================================================================
# FUNCIONES AUXILIARES
# =============================================================================

def plegar(texto: str) -> str:
    """Mayúsculas sin acentos, para comparaciones tolerantes."""
    return unidecode(texto).upper()


def normalizar_nombre_acto(nombre: str) -> str:
    """Quita espacios y el punto o dos puntos final: "Nombramientos." -> "Nombramientos"."""
    return nombre.strip().rstrip(".: ").strip()


def parsear_empresa(texto: str) -> Tuple[str, str, Optional[str]]:
    """
    Parsea la cabecera de una empresa.

    Prueba primero el patrón con registro y después el simple.

    Args:
        texto: "57344 - ALDARA CATERING SL(R.M. Madrid)"

    Returns:
        (id, nombre, registro). Sin coincidencia: ("", texto, None)
    """
    match = PATRON_EMPRESA_REGISTRO.match(texto)
    if match:
        return match.group(1), match.group(2).strip(), match.group(3).strip()

    match = PATRON_EMPRESA.match(texto)
    if match:
        return match.group(1), match.group(2).strip(), None

    return "", texto, None


def _limpiar_persona(persona: str) -> str:
    """Recorta espacios y el punto final, salvo abreviaturas tipo "S.L."."""
    persona = persona.strip()
    if persona.endswith('.') and not PATRON_ABREVIATURA_FINAL.search(persona):
        persona = persona[:-1].rstrip()
    return persona


def parsear_cargos(texto: str) -> Dict[str, List[str]]:
    """
    Parsea la lista de cargos de un acto.

    Ejemplo:
        "Adm. Solid.: JUAN PEREZ;MARIA GARCIA. Consejero: ANA RUIZ"
        -> {"Adm. Solid.": ["JUAN PEREZ", "MARIA GARCIA"],
            "Consejero": ["ANA RUIZ"]}

    Un cargo solo empieza al principio del texto o tras un punto, así que
    las personas o sociedades en minúsculas no se toman por cargos.
    Las personas vacías se descartan y un cargo sin personas no aparece.
    Si el mismo cargo se repite, sus personas se acumulan en orden.
    """
    resultado: Dict[str, List[str]] = {}

    matches = list(PATRON_CARGO.finditer(texto))
    for i, match in enumerate(matches):
        cargo = match.group(1).strip()
        fin = matches[i + 1].start() if i + 1 < len(matches) else len(texto)
        segmento = texto[match.end():fin]

        for persona in PATRON_SEPARADOR_PERSONAS.split(segmento):
            persona = _limpiar_persona(persona)
            # Un ":" suelto es un cargo que no se ha reconocido
            if persona and ":" not in persona:
                resultado.setdefault(cargo, []).append(persona)

    return resultado


def parsear_fecha(texto: str) -> Optional[date]:
    """
    Parsea una fecha en español: "Martes 27 de octubre de 2015".

    Día de la semana y mes sin distinguir mayúsculas ni acentos.
    Un día de la semana o mes desconocido, o una fecha imposible,
    devuelve None.
    """
    match = PATRON_FECHA.match(texto.strip())
    if not match:
        return None

    dia_semana, dia, mes, anio = match.groups()
    if plegar(dia_semana) not in DIAS_SEMANA:
        return None

    numero_mes = MESES.get(plegar(mes))
    if numero_mes is None:
        return None

    try:
        return date(int(anio), numero_mes, int(dia))
    except ValueError:
        return None


def parsear_acto_negrita(texto: str) -> Tuple[str, str]:
    """
    Separa un acto en negrita con argumento: "Capital: 3.000 EUR".

    Returns:
        (nombre, valor), o ("", texto) si no hay argumento
    """
    match = PATRON_NEGRITA.match(texto)
    if match:
        return match.group(1).strip(), match.group(2).strip()
    return "", texto


def parsear_arg_colon(texto: str) -> Tuple[str, str]:
    """
    Separa un acto con argumento tras dos puntos.

    Si el nombre es de un acto sin argumento, no se separa.

    Returns:
        (nombre, valor), o ("", texto) si no aplica
    """
    match = PATRON_ARG_COLON.match(texto)
    if match:
        nombre = match.group(1).strip()
        if es_acto_sin_argumento(nombre):
            return "", texto
        return nombre, match.group(2).strip()
    return "", texto


def parsear_sin_argumento(texto: str) -> str:
    """Nombre de un acto sin argumento, sin espacios sobrantes."""
    match = PATRON_SIN_ARG.match(texto)
    if match:
        return match.group(1).strip()
    return texto


def _paso_limpieza(texto: str) -> str:
    match = PATRON_PDF_TEXTO.match(texto)
    if match:
        texto = match.group(1)

    texto = texto.replace('\\(', '(').replace('\\)', ')').replace('\\ ', ' ')
    texto = re.sub(r' {2,}', ' ', texto)
    return texto.strip()


def limpiar_texto_pdf(texto: str) -> str:
    """
    Elimina artefactos de codificación del PDF.

    - Quita el envoltorio "(...)Tj"
    - Desescapa "\\(", "\\)" y "\\ "
    - Colapsa espacios repetidos y recorta

    Se aplica hasta que el texto no cambia, así que es idempotente.
    """
    while True:
        limpio = _paso_limpieza(texto)
        if limpio == texto:
            return limpio
        texto = limpio


def es_empresa(nombre: str) -> bool:
    """True si el nombre termina en una forma jurídica (SL, SA...)."""
    upper = nombre.strip().upper()
    return any(upper.endswith(sufijo) for sufijo in SUFIJOS_SOCIEDAD)


def capitalizar_frase(texto: str) -> str:
    """Primera letra en mayúscula, el resto en minúscula."""
    if not texto:
        return texto
    return texto[:1].upper() + texto[1:].lower()


def es_sucursal(nombre: str) -> bool:
    return "SUCURSAL EN ESPANA" in plegar(nombre)


def en_liquidacion(nombre: str) -> bool:
    return "EN LIQUIDACION" in plegar(nombre)


# =============================================================================
# CLASIFICACIÓN DE NOMBRES DE ACTO
# =============================================================================

_CARGO_PLEGADOS = frozenset(plegar(n) for n in ACTOS_CARGO)
_SIN_ARGUMENTO_PLEGADOS = frozenset(plegar(n) for n in ACTOS_SIN_ARGUMENTO)
_COLON_PLEGADOS = frozenset(plegar(n) for n in ACTOS_ARGUMENTO_COLON)
_NEGRITA_PLEGADOS = frozenset(plegar(n) for n in ACTOS_NEGRITA)


def es_acto_cargo(nombre: str) -> bool:
    return plegar(normalizar_nombre_acto(nombre)) in _CARGO_PLEGADOS


def es_acto_sin_argumento(nombre: str) -> bool:
    return plegar(normalizar_nombre_acto(nombre)) in _SIN_ARGUMENTO_PLEGADOS


def es_acto_colon(nombre: str) -> bool:
    return plegar(normalizar_nombre_acto(nombre)) in _COLON_PLEGADOS


def es_acto_negrita(nombre: str) -> bool:
    return plegar(normalizar_nombre_acto(nombre)) in _NEGRITA_PLEGADOS


# =============================================================================
# PROVINCIAS
# =============================================================================

# (nombre plegado, provincia), del nombre más largo al más corto; empate alfabético
_NOMBRES_PROVINCIA: Tuple[Tuple[str, Provincia], ...] = tuple(sorted(
    ((plegar(nombre), provincia)
     for provincia in PROVINCIAS
     for nombre in provincia.nombres),
    key=lambda par: (-len(par[0]), par[0]),
))


def buscar_provincia(texto: str) -> Optional[Provincia]:
    """
    Busca la provincia contenida en un texto.

    Comparación sin mayúsculas ni acentos; gana el nombre más largo
    que aparezca, así el resultado no depende del orden de la tabla.
    """
    texto_plegado = plegar(texto)
    for nombre, provincia in _NOMBRES_PROVINCIA:
        if nombre in texto_plegado:
            return provincia
    return None
