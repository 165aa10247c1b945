"""
Tests para el extractor de la sección C.

Prueba:
- Campos XML con grafías alternativas
- Documentos con varios anuncios
- Extracción laxa de HTML
- Marcado inválido
"""

import pytest
from datetime import date

from borme.errores import MalformedMarkupError
from borme.seccion_c import (
    es_xml,
    parsear_c,
    parsear_html,
    parsear_multiples_c,
    parsear_xml,
)


# =============================================================================
# XML
# =============================================================================

class TestParsearXml:
    """Tests para anuncios C en XML."""

    def test_campos_completos(self, xml_anuncio_c):
        anuncio = parsear_xml(xml_anuncio_c, filename="BORME-C-2015-10501.xml")

        assert anuncio.departamento == "CONVOCATORIAS DE JUNTAS"
        assert anuncio.titulo == "ALFA INVERSIONES, S.A."
        assert anuncio.empresa == "ALFA INVERSIONES, S.A."
        assert anuncio.cifs == ["A12345678"]
        assert anuncio.texto.startswith("Se convoca")
        assert anuncio.diario_numero == 205
        assert anuncio.numero_anuncio == "10501"
        assert anuncio.id_anuncio == "A150045678"
        assert anuncio.pagina_inicial == 12345
        assert anuncio.pagina_final == 12346
        assert anuncio.fecha == date(2015, 10, 27)
        assert anuncio.cve == "BORME-C-2015-10501"
        assert anuncio.filename == "BORME-C-2015-10501.xml"

    def test_grafias_alternativas(self):
        """Se aceptan etiquetas en inglés y en CamelCase."""
        xml = """<?xml version="1.0"?>
<announcement>
  <Departamento>DISOLUCIONES</Departamento>
  <company>OMEGA SL</company>
  <DiarioNumero>12</DiarioNumero>
  <date>20150602</date>
  <nif>B22222222</nif>
</announcement>"""
        anuncio = parsear_xml(xml)
        assert anuncio.departamento == "DISOLUCIONES"
        assert anuncio.empresa == "OMEGA SL"
        assert anuncio.diario_numero == 12
        assert anuncio.fecha == date(2015, 6, 2)
        assert anuncio.cifs == ["B22222222"]

    def test_primera_grafia_gana(self):
        """Con dos grafías presentes se usa la primera de la lista."""
        xml = "<anuncio><company>EN INGLES</company><empresa>EN ESPAÑOL</empresa></anuncio>"
        assert parsear_xml(xml).empresa == "EN ESPAÑOL"

    def test_texto_con_hijos(self):
        """El texto de un campo incluye el de sus descendientes."""
        xml = "<anuncio><texto>Se convoca <b>junta</b> general.</texto></anuncio>"
        assert parsear_xml(xml).texto == "Se convoca junta general."

    def test_parrafos_hijos_separados(self):
        """Cada párrafo hijo queda separado por un espacio."""
        xml = "<anuncio><texto><p>Uno.</p><p>Dos.</p>\n  <p>Tres</p></texto></anuncio>"
        assert parsear_xml(xml).texto == "Uno. Dos. Tres"

    def test_marcado_en_linea_sin_espacio_extra(self):
        xml = "<anuncio><empresa><b>ALFA</b>, S.A.</empresa></anuncio>"
        assert parsear_xml(xml).empresa == "ALFA, S.A."

    def test_campos_ausentes(self):
        anuncio = parsear_xml("<anuncio/>")
        assert anuncio.departamento == ""
        assert anuncio.diario_numero == 0
        assert anuncio.fecha is None
        assert anuncio.cifs == []
        assert anuncio.empresas_relacionadas == []

    def test_fecha_invalida(self):
        assert parsear_xml("<anuncio><fecha>ayer</fecha></anuncio>").fecha is None

    def test_xml_mal_formado(self):
        with pytest.raises(MalformedMarkupError):
            parsear_xml("<?xml version='1.0'?><anuncio><texto>sin cerrar</anuncio>")


class TestParsearMultiples:
    """Tests para documentos con varios anuncios."""

    def test_un_registro_por_nodo(self, xml_varios_anuncios_c):
        anuncios = parsear_multiples_c(xml_varios_anuncios_c)
        assert len(anuncios) == 3

    def test_campos_aislados_por_nodo(self, xml_varios_anuncios_c):
        """Cada anuncio solo ve los campos de su propio nodo."""
        primero, segundo, tercero = parsear_multiples_c(xml_varios_anuncios_c, "sumario.xml")

        assert primero.empresa == "BETA, S.L."
        assert primero.empresas_relacionadas == ["GAMMA, S.L.", "DELTA, S.L."]
        assert primero.cifs == ["B11111111"]

        assert segundo.departamento == "TRANSFORMACIÓN DE SOCIEDADES"
        assert segundo.empresa == "EPSILON, S.A."
        assert segundo.empresas_relacionadas == []
        assert segundo.cifs == []

        assert tercero.titulo == "REDUCCIÓN DE CAPITAL"
        assert tercero.empresa == ""
        assert tercero.departamento == ""
        assert all(a.filename == "sumario.xml" for a in (primero, segundo, tercero))

    def test_sin_nodos_de_anuncio(self):
        assert parsear_multiples_c("<sumario><otro/></sumario>") == []

    def test_mal_formado(self):
        with pytest.raises(MalformedMarkupError):
            parsear_multiples_c("<sumario><anuncio></sumario>")


# =============================================================================
# HTML
# =============================================================================

class TestParsearHtml:
    """Tests para anuncios C en HTML."""

    def test_campos(self, html_anuncio_c):
        anuncio = parsear_html(html_anuncio_c)
        assert anuncio.titulo == "CONVOCATORIAS DE JUNTAS"
        assert anuncio.empresa == "ALFA INVERSIONES, S.A."
        assert anuncio.texto == (
            "ALFA INVERSIONES, S.A. Se convoca a los señores accionistas. "
            "Madrid, 20 de octubre de 2015."
        )

    def test_titulo_de_title(self):
        """Sin encabezados el título sale de <title>."""
        anuncio = parsear_html("<html><head><title>Anuncio</title></head><body></body></html>")
        assert anuncio.titulo == "Anuncio"
        assert anuncio.texto == ""

    def test_empresa_en_span(self):
        anuncio = parsear_html('<p>Sociedad <span class="empresa">ZETA SL</span></p>')
        assert anuncio.empresa == "ZETA SL"

    def test_html_vacio(self):
        anuncio = parsear_html("")
        assert anuncio.titulo == ""
        assert anuncio.empresa == ""


# =============================================================================
# DESPACHO XML / HTML
# =============================================================================

class TestParsearC:
    """Tests para la elección de XML o HTML."""

    def test_es_xml(self, xml_anuncio_c, html_anuncio_c):
        assert es_xml(xml_anuncio_c)
        assert es_xml("<xml><anuncio/></xml>")
        assert not es_xml(html_anuncio_c)

    def test_despacho(self, xml_anuncio_c, html_anuncio_c):
        assert parsear_c(xml_anuncio_c).cve == "BORME-C-2015-10501"
        assert parsear_c(html_anuncio_c).titulo == "CONVOCATORIAS DE JUNTAS"
