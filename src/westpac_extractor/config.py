from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from .parse import DEFAULT_MAX_CONTINUATION_LINES


class RunConfig(BaseModel):
    source: Path = Field(..., description="Directorio con una carpeta por cuenta y <N>.pdf adentro")
    output: Path = Field(..., description="Directorio donde se escriben los CSV")
    pdf2text: str = "pdftotext"
    extractor: Literal["pdftotext", "pdfplumber"] = "pdftotext"
    max_continuation_lines: int = Field(DEFAULT_MAX_CONTINUATION_LINES, ge=1)
    debug: bool = False

    @field_validator("source")
    @classmethod
    def _source_readable(cls, v: Path) -> Path:
        if not (v.is_dir() and os.access(v, os.R_OK)):
            raise ValueError(f"El directorio origen debe ser legible: {v}")
        return v

    @field_validator("output")
    @classmethod
    def _output_writable(cls, v: Path) -> Path:
        if not (v.is_dir() and os.access(v, os.W_OK)):
            raise ValueError(f"El directorio de salida debe tener permiso de escritura: {v}")
        return v
