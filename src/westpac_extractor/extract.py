from __future__ import annotations

import logging
import subprocess
from pathlib import Path

import pdfplumber

from .config import RunConfig
from .errors import ExtractionError
from .lines import LineSource


logger = logging.getLogger(__name__)


def pdf_to_text(pdf_path: Path, tool: str = "pdftotext") -> str:
    """
    Convierte el PDF a texto con `pdftotext -layout` (salida por stdout).
    El layout importa: la línea resumen del formato viejo es de ancho fijo.
    """
    cmd = [tool, "-layout", str(pdf_path), "-"]
    logger.debug("Ejecutando: %s", " ".join(cmd))
    try:
        proc = subprocess.run(cmd, capture_output=True, check=False)
    except OSError as exc:
        raise ExtractionError(f"No se pudo ejecutar {tool!r}: {exc}") from exc

    if proc.returncode != 0:
        stderr = proc.stderr.decode("utf-8", errors="replace").strip()
        raise ExtractionError(f"Falló la conversión de {pdf_path} (exit {proc.returncode}): {stderr}")

    try:
        return proc.stdout.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ExtractionError(f"Salida ilegible de {tool!r} para {pdf_path}") from exc


def pdf_to_text_pdfplumber(pdf_path: Path) -> str:
    """Alternativa sin binario externo: pdfplumber con layout=True."""
    try:
        with pdfplumber.open(str(pdf_path)) as pdf:
            pages = [page.extract_text(layout=True) or "" for page in pdf.pages]
    except Exception as exc:
        raise ExtractionError(f"pdfplumber no pudo leer {pdf_path}: {exc}") from exc
    return "\n".join(pages)


def extract_lines(pdf_path: Path, config: RunConfig) -> LineSource:
    if config.extractor == "pdfplumber":
        text = pdf_to_text_pdfplumber(pdf_path)
    else:
        text = pdf_to_text(pdf_path, config.pdf2text)
    return LineSource.from_text(text)
