from __future__ import annotations

import csv
from pathlib import Path
from typing import Optional

from .discover import StatementFile
from .models import Statement


def csv_name(statement_file: StatementFile) -> str:
    return f"{statement_file.account}_{statement_file.number}.csv"


def write_statement_csv(statement_file: StatementFile, statement: Statement, output_dir: Path) -> Optional[Path]:
    """
    Un CSV por cuenta+statement, todos los campos entre comillas:
    cuenta, número, fecha ISO, monto con signo, descripción (puede ser multilínea).
    No se generan archivos vacíos.
    """
    if not statement.transactions:
        return None

    out_path = Path(output_dir) / csv_name(statement_file)
    with out_path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.writer(fh, quoting=csv.QUOTE_ALL, lineterminator="\n")
        for t in statement.transactions:
            writer.writerow([
                statement_file.account,
                statement_file.number,
                t.date.isoformat() if t.date else "",
                f"{t.amount:.2f}",
                t.description,
            ])
    return out_path
