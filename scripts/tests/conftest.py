"""
Fixtures para tests del parser BORME.

Proporciona datos de prueba para:
- Boletines de las secciones A/B (texto decodificado del PDF)
- Anuncios de la sección C (XML y HTML)
- Sumario diario del BOE
"""

import pytest
from pathlib import Path
import sys

# Agregar scripts/ al path para imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from borme.models import Anuncio, Borme, Seccion


# =============================================================================
# BOLETINES A/B
# =============================================================================

@pytest.fixture
def texto_borme_a():
    """Boletín A con cabecera completa y dos anuncios."""
    return "\n".join([
        "Núm. 205",
        "Fecha",
        "Martes 27 de octubre de 2015",
        "Sección",
        "SECCIÓN PRIMERA",
        "Provincia",
        "MADRID",
        "cve: BORME-A-2015-205-28",
        "Cabecera",
        "/F1 (451000 - ALDARA CATERING SL(R.M. Madrid).)Tj",
        "Texto",
        "/F1 (Constitución.)Tj",
        "/F2 (Comienzo de operaciones: 1.10.15. Capital: 3.000,00 Euros.)Tj",
        "/F1 (Nombramientos.)Tj",
        "/F2 (Adm. Unico: GARCIA LOPEZ JUAN.)Tj",
        "/F1 (Datos registrales.)Tj",
        r"/F2 (T 34074 , F 1, S 8, H M 612908, I/A 1 \(20.10.15\).)Tj",
        "Cabecera",
        "/F1 (451001 - BETA SUCURSAL EN ESPAÑA SL(R.M. Madrid).)Tj",
        "Texto",
        "/F1 (Sociedad unipersonal.)Tj",
        "/F1 (Capital: 60.000,00 Euros.)Tj",
        "/F1 (Ceses/Dimisiones.)Tj",
        "/F2 (Adm. Solid.: JUAN PEREZ;MARIA GARCIA.)Tj",
    ]) + "\n"


@pytest.fixture
def texto_borme_sin_anuncios():
    """Boletín con metadatos pero sin cabeceras de empresa."""
    return "\n".join([
        "Núm. 12",
        "Fecha",
        "lunes 2 de junio de 2015",
        "cve: BORME-B-2015-12-08",
    ]) + "\n"


@pytest.fixture
def crear_borme():
    """Factory para boletines con anuncios de ids dados."""
    def _crear(ids, seccion: Seccion = Seccion.A) -> Borme:
        borme = Borme(seccion=seccion)
        for id_anuncio in ids:
            borme.agregar_anuncio(Anuncio(id=id_anuncio, empresa=f"EMPRESA {id_anuncio} SL"))
        borme.calcular_rango()
        return borme
    return _crear


# =============================================================================
# SECCIÓN C
# =============================================================================

@pytest.fixture
def xml_anuncio_c():
    """Anuncio C en XML con todos los campos."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<anuncio>
  <departamento>CONVOCATORIAS DE JUNTAS</departamento>
  <titulo>ALFA INVERSIONES, S.A.</titulo>
  <empresa>ALFA INVERSIONES, S.A.</empresa>
  <cif>A12345678</cif>
  <texto>Se convoca a los señores accionistas a la Junta General.</texto>
  <diario_numero>Núm. 205</diario_numero>
  <numero_anuncio>10501</numero_anuncio>
  <id_anuncio>A150045678</id_anuncio>
  <pagina_inicial>12345</pagina_inicial>
  <pagina_final>12346</pagina_final>
  <fecha>2015-10-27</fecha>
  <cve>BORME-C-2015-10501</cve>
</anuncio>
"""


@pytest.fixture
def xml_varios_anuncios_c():
    """Documento C con tres anuncios; el segundo y el tercero incompletos."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<sumario>
  <anuncio>
    <departamento>FUSIONES Y ABSORCIONES</departamento>
    <empresa>BETA, S.L.</empresa>
    <relacionada>GAMMA, S.L.</relacionada>
    <relacionada>DELTA, S.L.</relacionada>
    <cif>B11111111</cif>
  </anuncio>
  <anuncio>
    <departamento>TRANSFORMACIÓN DE SOCIEDADES</departamento>
    <empresa>EPSILON, S.A.</empresa>
  </anuncio>
  <anuncio>
    <titulo>REDUCCIÓN DE CAPITAL</titulo>
  </anuncio>
</sumario>
"""


@pytest.fixture
def html_anuncio_c():
    """Anuncio C en HTML (txt.php del BOE)."""
    return """<html>
<head><title>BOE.es - BORME-C-2015-10501</title></head>
<body>
  <h2>CONVOCATORIAS DE JUNTAS</h2>
  <p><strong>ALFA INVERSIONES, S.A.</strong></p>
  <p>Se convoca a los señores accionistas.</p>
  <div class="texto">Madrid, 20 de octubre de 2015.</div>
</body>
</html>
"""


# =============================================================================
# SUMARIO
# =============================================================================

@pytest.fixture
def xml_sumario():
    """Sumario diario con dos anuncios de la sección C."""
    return b"""<?xml version="1.0" encoding="UTF-8"?>
<diario>
  <date>27/10/2015</date>
  <nbo>205</nbo>
  <seccion letra="A">
    <empresa>
      <provincia>MADRID</provincia>
      <urlpdf>/borme/dias/2015/10/27/pdfs/BORME-A-2015-205-28.pdf</urlpdf>
    </empresa>
  </seccion>
  <seccion letra="C">
    <empresa>
      <id>A150045678</id>
      <nbo>205</nbo>
      <num>10501</num>
      <pag>12345</pag>
      <urlcve>/diario_borme/xml.php?id=BORME-C-2015-10501</urlcve>
    </empresa>
    <empresa>
      <id>A150045679</id>
      <urlcve>https://www.boe.es/diario_borme/xml.php?id=BORME-C-2015-10502</urlcve>
    </empresa>
  </seccion>
</diario>
"""
