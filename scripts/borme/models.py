"""
Modelos de datos del parser BORME.

Dataclasses que representan:
- Boletín de secciones A/B (Borme) con sus anuncios
- Anuncios de empresa con sus actos en orden de aparición
- Actos como unión etiquetada: ActoTexto | ActoCargo
- Anuncios de la sección C (AnuncioC)
- Tabla estática de provincias
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

from .errores import UnsupportedSectionError


class Seccion(Enum):
    """Secciones del BORME."""
    A = "A"    # Actos inscritos
    B = "B"    # Otros actos publicados
    C = "C"    # Anuncios y avisos legales

    @classmethod
    def desde(cls, valor) -> "Seccion":
        """
        Normaliza una etiqueta de sección ("a", "B", Seccion.C...).

        Raises:
            UnsupportedSectionError: Si no es A, B ni C
        """
        if isinstance(valor, cls):
            return valor
        try:
            return cls(str(valor).strip().upper())
        except ValueError:
            raise UnsupportedSectionError(valor) from None


class TipoActo(Enum):
    """Discriminante de la unión de actos."""
    TEXTO = "texto"
    CARGO = "cargo"


# =============================================================================
# PROVINCIAS
# =============================================================================

@dataclass(frozen=True)
class Provincia:
    """
    Provincia española.

    Attributes:
        codigo: Código INE (1-52)
        nombre: Nombre oficial
        alias: Grafías alternativas que también aparecen en los boletines
    """
    codigo: int
    nombre: str
    alias: Tuple[str, ...] = ()

    @property
    def nombres(self) -> Tuple[str, ...]:
        return (self.nombre,) + self.alias

    def to_dict(self) -> dict:
        return {"code": self.codigo, "name": self.nombre}


PROVINCIAS: Tuple[Provincia, ...] = (
    Provincia(1, "Araba/Álava", ("Álava", "Araba")),
    Provincia(2, "Albacete"),
    Provincia(3, "Alicante", ("Alacant",)),
    Provincia(4, "Almería"),
    Provincia(5, "Ávila"),
    Provincia(6, "Badajoz"),
    Provincia(7, "Illes Balears", ("Islas Baleares", "Baleares")),
    Provincia(8, "Barcelona"),
    Provincia(9, "Burgos"),
    Provincia(10, "Cáceres"),
    Provincia(11, "Cádiz"),
    Provincia(12, "Castellón", ("Castelló",)),
    Provincia(13, "Ciudad Real"),
    Provincia(14, "Córdoba"),
    Provincia(15, "A Coruña", ("La Coruña",)),
    Provincia(16, "Cuenca"),
    Provincia(17, "Girona", ("Gerona",)),
    Provincia(18, "Granada"),
    Provincia(19, "Guadalajara"),
    Provincia(20, "Gipuzkoa", ("Guipúzcoa",)),
    Provincia(21, "Huelva"),
    Provincia(22, "Huesca"),
    Provincia(23, "Jaén"),
    Provincia(24, "León"),
    Provincia(25, "Lleida", ("Lérida",)),
    Provincia(26, "La Rioja"),
    Provincia(27, "Lugo"),
    Provincia(28, "Madrid"),
    Provincia(29, "Málaga"),
    Provincia(30, "Murcia"),
    Provincia(31, "Navarra"),
    Provincia(32, "Ourense", ("Orense",)),
    Provincia(33, "Asturias"),
    Provincia(34, "Palencia"),
    Provincia(35, "Las Palmas"),
    Provincia(36, "Pontevedra"),
    Provincia(37, "Salamanca"),
    Provincia(38, "Santa Cruz de Tenerife"),
    Provincia(39, "Cantabria"),
    Provincia(40, "Segovia"),
    Provincia(41, "Sevilla"),
    Provincia(42, "Soria"),
    Provincia(43, "Tarragona"),
    Provincia(44, "Teruel"),
    Provincia(45, "Toledo"),
    Provincia(46, "Valencia", ("València",)),
    Provincia(47, "Valladolid"),
    Provincia(48, "Bizkaia", ("Vizcaya",)),
    Provincia(49, "Zamora"),
    Provincia(50, "Zaragoza"),
    Provincia(51, "Ceuta"),
    Provincia(52, "Melilla"),
)


# =============================================================================
# ACTOS
# =============================================================================

@dataclass(frozen=True)
class ActoTexto:
    """
    Acto de texto libre (Constitución, Disolución, Capital...).

    El valor es None para actos sin argumento (ej: "Sociedad unipersonal").
    """
    nombre: str
    valor: Optional[str] = None
    tipo: TipoActo = field(default=TipoActo.TEXTO, init=False)

    def to_dict(self) -> dict:
        resultado = {"name": self.nombre}
        if self.valor is not None:
            resultado["value"] = self.valor
        return resultado


@dataclass(frozen=True)
class ActoCargo:
    """
    Acto con cargos asignados (Nombramientos, Ceses/Dimisiones...).

    valor: cargo -> lista ordenada y no vacía de personas
    Ej: {"Adm. Solid.": ["JUAN PEREZ", "MARIA GARCIA"]}
    """
    nombre: str
    valor: Dict[str, List[str]] = field(default_factory=dict)
    tipo: TipoActo = field(default=TipoActo.CARGO, init=False)

    @property
    def nombres_cargos(self) -> List[str]:
        """Cargos en orden de aparición."""
        return list(self.valor.keys())

    def to_dict(self) -> dict:
        return {
            "name": self.nombre,
            "value": {cargo: list(personas) for cargo, personas in self.valor.items()},
        }


Acto = Union[ActoTexto, ActoCargo]


# =============================================================================
# SECCIONES A/B
# =============================================================================

@dataclass
class Anuncio:
    """
    Anuncio de una empresa dentro del boletín.

    Attributes:
        id: Identificador secuencial dentro del boletín (1, 2, 3...)
        empresa: Denominación social
        registro: Registro mercantil, si la cabecera lo indica "(R.M. Madrid)"
        sucursal: True si es sucursal en España de una sociedad extranjera
        liquidacion: True si la sociedad está en liquidación
        datos_registrales: Texto del acto "Datos registrales"
        actos: Actos en el mismo orden que en el texto fuente
    """
    id: int
    empresa: str
    registro: Optional[str] = None
    sucursal: bool = False
    liquidacion: bool = False
    datos_registrales: Optional[str] = None
    actos: List[Acto] = field(default_factory=list)

    def agregar_acto(self, acto: Acto):
        self.actos.append(acto)

    def __str__(self) -> str:
        return f"Anuncio(id={self.id}, empresa={self.empresa})"

    def to_dict(self) -> dict:
        resultado = {"id": self.id, "empresa": self.empresa}
        if self.registro:
            resultado["registro"] = self.registro
        if self.sucursal:
            resultado["sucursal"] = True
        if self.liquidacion:
            resultado["liquidacion"] = True
        if self.datos_registrales:
            resultado["datos_registrales"] = self.datos_registrales
        resultado["actos"] = [acto.to_dict() for acto in self.actos]
        return resultado


@dataclass
class Borme:
    """
    Boletín de las secciones A/B.

    Los anuncios se indexan por id (único) y conservan el orden de
    inserción, que es el orden del texto fuente. El rango se calcula
    al terminar el parseo y queda en None si no hay anuncios.
    """
    seccion: Seccion = Seccion.A
    fecha: Optional[date] = None
    provincia: Optional[Provincia] = None
    num: int = 0
    cve: str = ""
    filename: Optional[str] = None
    anuncios: Dict[int, Anuncio] = field(default_factory=dict)
    anuncios_rango: Optional[Tuple[int, int]] = None

    def agregar_anuncio(self, anuncio: Anuncio):
        """Agrega un anuncio. Los ids deben ser únicos."""
        if anuncio.id in self.anuncios:
            raise ValueError(f"Anuncio duplicado: {anuncio.id}")
        self.anuncios[anuncio.id] = anuncio

    def calcular_rango(self):
        """Fija anuncios_rango a (min, max) de los ids presentes."""
        if self.anuncios:
            self.anuncios_rango = (min(self.anuncios), max(self.anuncios))
        else:
            self.anuncios_rango = None

    def get_anuncios(self) -> List[Anuncio]:
        return list(self.anuncios.values())

    def to_dict(self) -> dict:
        resultado = {}
        if self.fecha is not None:
            resultado["date"] = self.fecha.isoformat()
        resultado["seccion"] = self.seccion.value
        if self.provincia is not None:
            resultado["provincia"] = self.provincia.to_dict()
        resultado["num"] = self.num
        if self.cve:
            resultado["cve"] = self.cve
        if self.filename:
            resultado["filename"] = self.filename
        resultado["anuncios"] = {
            str(id_anuncio): anuncio.to_dict()
            for id_anuncio, anuncio in self.anuncios.items()
        }
        if self.anuncios_rango is not None:
            resultado["anuncios_rango"] = list(self.anuncios_rango)
        return resultado


# =============================================================================
# SECCIÓN C
# =============================================================================

@dataclass
class AnuncioC:
    """
    Anuncio de la sección C (XML/HTML).

    Los campos ausentes en el documento quedan en su valor vacío
    ("", 0, None, []).
    """
    departamento: str = ""
    texto: str = ""
    diario_numero: int = 0
    numero_anuncio: str = ""
    id_anuncio: str = ""
    pagina_inicial: int = 0
    pagina_final: int = 0
    fecha: Optional[date] = None
    titulo: str = ""
    empresa: str = ""
    empresas_relacionadas: List[str] = field(default_factory=list)
    cifs: List[str] = field(default_factory=list)
    cve: str = ""
    seccion: Seccion = Seccion.C
    filename: Optional[str] = None

    def to_dict(self) -> dict:
        resultado = {
            "departamento": self.departamento,
            "texto": self.texto,
            "diario_numero": self.diario_numero,
            "numero_anuncio": self.numero_anuncio,
            "id_anuncio": self.id_anuncio,
            "pagina_inicial": self.pagina_inicial,
            "pagina_final": self.pagina_final,
        }
        if self.fecha is not None:
            resultado["fecha"] = self.fecha.isoformat()
        resultado["titulo"] = self.titulo
        resultado["empresa"] = self.empresa
        if self.empresas_relacionadas:
            resultado["empresas_relacionadas"] = list(self.empresas_relacionadas)
        if self.cifs:
            resultado["cifs"] = list(self.cifs)
        resultado["cve"] = self.cve
        resultado["seccion"] = self.seccion.value
        if self.filename:
            resultado["filename"] = self.filename
        return resultado
