from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import List


STATEMENT_FILE_RE = re.compile(r"^(\d+)\.pdf$")


@dataclass(frozen=True)
class StatementFile:
    account: str
    number: int
    path: Path


def discover_statements(source: Path) -> List[StatementFile]:
    """
    Estructura esperada:
      source/<cuenta>/<N>.pdf
    Orden: cuenta, luego número de statement (numérico).
    """
    found: List[StatementFile] = []
    for acc_dir in sorted(Path(source).iterdir()):
        if not acc_dir.is_dir():
            continue
        for f in acc_dir.iterdir():
            m = STATEMENT_FILE_RE.match(f.name)
            if m and f.is_file():
                found.append(StatementFile(account=acc_dir.name, number=int(m.group(1)), path=f))

    found.sort(key=lambda s: (s.account, s.number))
    return found
