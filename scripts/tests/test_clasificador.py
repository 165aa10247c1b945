"""
Tests para el clasificador de actos.
"""

from borme.clasificador import ClaseActo, clasificar_acto, tipo_de_acto
from borme.models import ActoCargo, ActoTexto, TipoActo


class TestTipoDeActo:
    """Tests para la clase de un nombre de acto."""

    def test_clases(self):
        assert tipo_de_acto("Nombramientos") is ClaseActo.CARGO
        assert tipo_de_acto("Extinción") is ClaseActo.SIN_ARGUMENTO
        assert tipo_de_acto("Capital") is ClaseActo.ARGUMENTO_COLON
        assert tipo_de_acto("Fusión por absorción") is ClaseActo.NEGRITA
        assert tipo_de_acto("Constitución") is ClaseActo.GENERICO

    def test_nombre_con_punto(self):
        assert tipo_de_acto("Ceses/Dimisiones.") is ClaseActo.CARGO


class TestClasificarActo:
    """Tests para la conversión a acto tipado."""

    def test_acto_cargo(self):
        """Un acto de cargo produce un mapa cargo -> personas."""
        acto = clasificar_acto("Nombramientos.", "Adm. Solid.: JUAN PEREZ;MARIA GARCIA.")
        assert isinstance(acto, ActoCargo)
        assert acto.tipo is TipoActo.CARGO
        assert acto.nombre == "Nombramientos"
        assert acto.valor == {"Adm. Solid.": ["JUAN PEREZ", "MARIA GARCIA"]}
        assert acto.nombres_cargos == ["Adm. Solid."]

    def test_acto_cargo_sin_personas(self):
        """Un valor irreconocible da un ActoCargo vacío, nunca un error."""
        acto = clasificar_acto("Revocaciones", "sin cargos")
        assert isinstance(acto, ActoCargo)
        assert acto.valor == {}

    def test_acto_texto(self):
        acto = clasificar_acto("Constitución", "  Comienzo de operaciones: 1.10.15.  ")
        assert isinstance(acto, ActoTexto)
        assert acto.tipo is TipoActo.TEXTO
        assert acto.valor == "Comienzo de operaciones: 1.10.15."

    def test_acto_sin_argumento(self):
        acto = clasificar_acto("Sociedad unipersonal.", None)
        assert acto == ActoTexto(nombre="Sociedad unipersonal")
        assert acto.to_dict() == {"name": "Sociedad unipersonal"}

    def test_valor_vacio_es_none(self):
        assert clasificar_acto("Capital", "   ").valor is None

    def test_gramaticas_colon_y_negrita_misma_forma(self):
        """Las clases sin cargo producen la misma forma de acto."""
        colon = clasificar_acto("Capital", "3.000 Euros")
        negrita = clasificar_acto("Fusión", "ALFA SL absorbe a BETA SL")
        assert type(colon) is type(negrita) is ActoTexto
