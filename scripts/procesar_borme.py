#!/usr/bin/env python3
"""
Procesa documentos del BORME y genera JSON.

Un fichero: el JSON va a stdout o a --output.
Un directorio: se procesan en paralelo todos los documentos; un fallo
no detiene el lote, queda como registro de error en el resumen.

Uso:
    python scripts/procesar_borme.py --file BORME-A-2015-205-28.txt --seccion A --pretty
    python scripts/procesar_borme.py --file descargas/ --seccion C --multiple --output json/ --workers 8
"""

import argparse
import logging
import sys
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from tqdm import tqdm

# Agregar path para imports
sys.path.insert(0, str(Path(__file__).parent))

from borme.config import EXTENSIONES_PROCESABLES, WORKERS_DEFECTO
from borme.documento import parsear, parsear_anuncios_c
from borme.errores import BormeError
from borme.models import Borme, Seccion
from borme.registro import setup_logging
from borme.serializar import a_json

logger = logging.getLogger("borme.lote")


@dataclass
class ResultadoDocumento:
    """Resultado de procesar un documento del lote."""
    archivo: str
    ok: bool
    anuncios: int = 0
    salida: Optional[str] = None
    error: Optional[str] = None


def listar_documentos(directorio: Path) -> List[Path]:
    """Documentos procesables de un directorio (no recursivo), ordenados."""
    return sorted(
        p for p in directorio.iterdir()
        if p.is_file() and p.suffix.lower() in EXTENSIONES_PROCESABLES
    )


def ruta_salida(archivo: Path, output_dir: Path) -> Path:
    return output_dir / f"{archivo.stem}.json"


def procesar_documento(
    archivo: Path,
    seccion: Seccion,
    output_dir: Optional[Path] = None,
    pretty: bool = False,
    multiple: bool = False
) -> ResultadoDocumento:
    """
    Parsea un documento y escribe su JSON.

    Los errores del parser y de escritura se devuelven como resultado
    fallido, nunca se propagan.
    """
    try:
        if seccion is Seccion.C and multiple:
            resultado = parsear_anuncios_c(archivo)
            anuncios = len(resultado)
        else:
            resultado = parsear(archivo, seccion)
            anuncios = len(resultado.anuncios) if isinstance(resultado, Borme) else 1

        salida = None
        if output_dir is not None:
            salida = ruta_salida(archivo, output_dir)
            salida.write_text(a_json(resultado, pretty), encoding="utf-8")

        return ResultadoDocumento(
            archivo=str(archivo),
            ok=True,
            anuncios=anuncios,
            salida=str(salida) if salida else None,
        )

    except (BormeError, OSError) as e:
        logger.debug(f"Fallo en {archivo.name}: {e}")
        return ResultadoDocumento(archivo=str(archivo), ok=False, error=str(e))


def procesar_lote(
    archivos: List[Path],
    seccion: Seccion,
    output_dir: Optional[Path] = None,
    pretty: bool = False,
    multiple: bool = False,
    workers: int = WORKERS_DEFECTO
) -> List[ResultadoDocumento]:
    """
    Procesa documentos en paralelo.

    Returns:
        Un resultado por documento, en el mismo orden que archivos
    """
    resultados: List[Optional[ResultadoDocumento]] = [None] * len(archivos)

    with ThreadPoolExecutor(max_workers=max(1, workers)) as executor:
        futuros = {
            executor.submit(procesar_documento, archivo, seccion, output_dir, pretty, multiple): i
            for i, archivo in enumerate(archivos)
        }
        for futuro in tqdm(as_completed(futuros), total=len(futuros), desc="Procesando", unit="doc"):
            resultados[futuros[futuro]] = futuro.result()

    return resultados


def imprimir_resumen(resultados: List[ResultadoDocumento]):
    """Registra el resumen del lote."""
    exitosos = [r for r in resultados if r.ok]
    fallidos = [r for r in resultados if not r.ok]

    logger.info("=" * 60)
    logger.info("RESUMEN")
    logger.info("=" * 60)
    logger.info(f"Documentos: {len(resultados)}")
    logger.info(f"  - Correctos: {len(exitosos)}")
    logger.info(f"  - Fallidos:  {len(fallidos)}")
    logger.info(f"  - Anuncios:  {sum(r.anuncios for r in exitosos)}")

    for r in fallidos[:10]:
        logger.warning(f"  FAIL: {Path(r.archivo).name} - {r.error}")
    if len(fallidos) > 10:
        logger.warning(f"  ... y {len(fallidos) - 10} más")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Parsea documentos del BORME a JSON")
    parser.add_argument("--file", type=Path, required=True, help="Fichero o directorio a procesar")
    parser.add_argument("--seccion", default="A", type=str.upper, choices=("A", "B", "C"), help="Sección")
    parser.add_argument("--output", type=Path, help="Directorio de salida de los JSON")
    parser.add_argument("--pretty", action="store_true", help="JSON indentado")
    parser.add_argument("--workers", type=int, default=WORKERS_DEFECTO, help="Documentos en paralelo")
    parser.add_argument("--multiple", action="store_true", help="Sección C: varios anuncios por XML")
    args = parser.parse_args(argv)

    setup_logging("procesado", logs_dir=args.output / "logs" if args.output else None)
    seccion = Seccion(args.seccion)

    if not args.file.exists():
        logger.error(f"No existe: {args.file}")
        return 1

    if args.output:
        args.output.mkdir(parents=True, exist_ok=True)

    # === FICHERO ÚNICO ===
    if args.file.is_file():
        if args.output:
            resultado = procesar_documento(args.file, seccion, args.output, args.pretty, args.multiple)
            if not resultado.ok:
                logger.error(f"Error parseando {args.file}: {resultado.error}")
                return 1
            logger.info(f"Escrito: {resultado.salida}")
            return 0

        try:
            if seccion is Seccion.C and args.multiple:
                documento = parsear_anuncios_c(args.file)
            else:
                documento = parsear(args.file, seccion)
        except BormeError as e:
            logger.error(f"Error parseando {args.file}: {e}")
            return 1
        sys.stdout.write(a_json(documento, args.pretty))
        if not args.pretty:
            sys.stdout.write("\n")
        return 0

    # === DIRECTORIO ===
    archivos = listar_documentos(args.file)
    if not archivos:
        logger.warning(f"No hay documentos procesables en {args.file}")
        return 0

    logger.info(f"Procesando {len(archivos)} documentos con {args.workers} workers...")
    resultados = procesar_lote(archivos, seccion, args.output, args.pretty, args.multiple, args.workers)
    imprimir_resumen(resultados)

    return 0 if all(r.ok for r in resultados) else 1


if __name__ == "__main__":
    sys.exit(main())
