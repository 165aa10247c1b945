"""
Tests de integración del procesado por lotes.

Escriben ficheros en tmp_path y ejecutan main() como lo haría la CLI.
"""

import json

import pytest

from borme.models import Seccion
from procesar_borme import (
    ResultadoDocumento,
    listar_documentos,
    main,
    procesar_documento,
    procesar_lote,
)


@pytest.fixture
def directorio_lote(tmp_path, texto_borme_a):
    """Directorio con dos boletines válidos, un PDF binario y un fichero ajeno."""
    entrada = tmp_path / "entrada"
    entrada.mkdir()
    (entrada / "BORME-A-2015-205-28.txt").write_text(texto_borme_a, encoding="utf-8")
    (entrada / "BORME-A-2015-205-08.txt").write_text(texto_borme_a, encoding="utf-8")
    (entrada / "BORME-A-2015-205-41.pdf").write_bytes(b"%PDF-1.4\n%\xe2\xe3\xcf\xd3\n")
    (entrada / "notas.md").write_text("no es un boletín", encoding="utf-8")
    return entrada


@pytest.mark.integracion
class TestProcesarDocumento:
    """Tests para un documento individual."""

    def test_correcto(self, directorio_lote, tmp_path):
        salida = tmp_path / "json"
        salida.mkdir()

        resultado = procesar_documento(directorio_lote / "BORME-A-2015-205-28.txt", Seccion.A, salida)
        assert resultado.ok
        assert resultado.anuncios == 2

        datos = json.loads((salida / "BORME-A-2015-205-28.json").read_text(encoding="utf-8"))
        assert datos["cve"] == "BORME-A-2015-205-28"

    def test_fallo_como_registro(self, directorio_lote):
        """Un PDF binario no lanza: queda como resultado fallido."""
        resultado = procesar_documento(directorio_lote / "BORME-A-2015-205-41.pdf", Seccion.A)
        assert not resultado.ok
        assert "PDF binario" in resultado.error

    def test_seccion_c_multiple(self, tmp_path, xml_varios_anuncios_c):
        ruta = tmp_path / "BORME-C-2015-205.xml"
        ruta.write_text(xml_varios_anuncios_c, encoding="utf-8")

        resultado = procesar_documento(ruta, Seccion.C, multiple=True)
        assert resultado.ok
        assert resultado.anuncios == 3


@pytest.mark.integracion
class TestProcesarLote:
    """Tests para el procesado en paralelo."""

    def test_listar_documentos(self, directorio_lote):
        nombres = [p.name for p in listar_documentos(directorio_lote)]
        assert nombres == [
            "BORME-A-2015-205-08.txt",
            "BORME-A-2015-205-28.txt",
            "BORME-A-2015-205-41.pdf",
        ]

    def test_lote_continua_tras_fallo(self, directorio_lote):
        archivos = listar_documentos(directorio_lote)
        resultados = procesar_lote(archivos, Seccion.A, workers=2)

        assert [r.archivo for r in resultados] == [str(a) for a in archivos]
        assert [r.ok for r in resultados] == [True, True, False]
        assert all(isinstance(r, ResultadoDocumento) for r in resultados)


@pytest.mark.integracion
class TestMain:
    """Tests para la CLI."""

    def test_directorio_con_fallo(self, directorio_lote, tmp_path):
        salida = tmp_path / "json"
        codigo = main(["--file", str(directorio_lote), "--output", str(salida), "--workers", "2"])

        assert codigo == 1
        assert (salida / "BORME-A-2015-205-28.json").exists()
        assert (salida / "BORME-A-2015-205-08.json").exists()
        assert not (salida / "BORME-A-2015-205-41.json").exists()

    def test_fichero_a_stdout(self, directorio_lote, capsys):
        codigo = main(["--file", str(directorio_lote / "BORME-A-2015-205-28.txt"), "--pretty"])

        assert codigo == 0
        salida = capsys.readouterr().out
        assert salida.endswith("\n")
        assert json.loads(salida)["num"] == 205

    def test_fichero_fallido(self, directorio_lote):
        assert main(["--file", str(directorio_lote / "BORME-A-2015-205-41.pdf")]) == 1

    def test_ruta_inexistente(self, tmp_path):
        assert main(["--file", str(tmp_path / "no_existe")]) == 1

    def test_seccion_invalida(self, directorio_lote):
        with pytest.raises(SystemExit):
            main(["--file", str(directorio_lote), "--seccion", "Z"])
