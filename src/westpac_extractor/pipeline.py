from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional, Tuple

from pydantic import ValidationError
from rich.console import Console

from .config import RunConfig
from .discover import StatementFile, discover_statements
from .errors import ExtractorError, StatementInvalidError
from .extract import extract_lines
from .models import Statement
from .output import write_statement_csv
from .parse import DEFAULT_MAX_CONTINUATION_LINES, parse_statement
from .utils import setup_logging
from .validate import validate_statement


logger = logging.getLogger(__name__)


def process_statement(statement_file: StatementFile, config: RunConfig) -> Statement:
    """PDF -> texto -> Statement validado. Lanza StatementInvalidError si no reconcilia."""
    source = extract_lines(statement_file.path, config)
    statement = parse_statement(source, config.max_continuation_lines)

    errors = validate_statement(statement)
    if errors:
        raise StatementInvalidError(statement_file.account, statement_file.number, errors)

    logger.info(
        "Statement %s de %s: %d transacciones",
        statement_file.number,
        statement_file.account,
        len(statement.transactions),
    )
    return statement


def run(config: RunConfig) -> List[Path]:
    """
    Procesa todos los statements y recién después escribe los CSV:
    un statement inválido corta toda la corrida sin generar salida.
    """
    parsed: List[Tuple[StatementFile, Statement]] = []
    for sf in discover_statements(config.source):
        parsed.append((sf, process_statement(sf, config)))

    written: List[Path] = []
    for sf, statement in parsed:
        out = write_statement_csv(sf, statement, config.output)
        if out is not None:
            written.append(out)
    return written


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Westpac PDF statements -> CSV")
    parser.add_argument("--source", required=True, help="Directorio origen (una carpeta por cuenta)")
    parser.add_argument("--output", required=True, help="Directorio de salida para los CSV")
    parser.add_argument("--pdf2text", default="pdftotext", help="Ruta al binario pdftotext")
    parser.add_argument(
        "--extractor",
        choices=("pdftotext", "pdfplumber"),
        default="pdftotext",
        help="Backend de extracción de texto",
    )
    parser.add_argument(
        "--max-continuation-lines",
        type=int,
        default=DEFAULT_MAX_CONTINUATION_LINES,
        help="Máximo de líneas extra de descripción por transacción",
    )
    parser.add_argument("--debug", action="store_true", help="Logging detallado")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    console = Console()

    try:
        config = RunConfig(
            source=Path(args.source),
            output=Path(args.output),
            pdf2text=args.pdf2text,
            extractor=args.extractor,
            max_continuation_lines=args.max_continuation_lines,
            debug=args.debug,
        )
    except ValidationError as exc:
        for err in exc.errors():
            console.print(f"Configuración inválida: {err['msg']}", style="bold red")
        return 2

    setup_logging(debug=config.debug)
    console.print(f"Procesando: {config.source}", style="bold")

    try:
        written = run(config)
    except StatementInvalidError as exc:
        console.print(f"Statement {exc.number} de {exc.account} falló con errores:", style="bold red")
        for err in exc.errors:
            console.print(f"\t{err}", markup=False)
        return 1
    except ExtractorError as exc:
        console.print(f"ERROR: {exc}", style="bold red")
        return 1

    for out in written:
        console.print(f"OK -> {out}", style="bold green")
    console.print(f"Archivos generados: {len(written)}", style="bold cyan")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
