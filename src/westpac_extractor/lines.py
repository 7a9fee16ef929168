from __future__ import annotations

from typing import Iterable, Iterator, List, Optional


class LineSource:
    """
    Fuente secuencial de líneas (salida de pdftotext -layout):
    - next_line() devuelve None al final del input
    - push_back() devuelve una línea al frente (lookahead de una línea)
    Se preserva el espaciado horizontal; solo se quita el salto de línea.
    """

    def __init__(self, lines: Iterable[str]):
        self._it: Iterator[str] = iter(lines)
        self._pending: List[str] = []
        self.line_number = 0

    @classmethod
    def from_text(cls, text: str) -> "LineSource":
        return cls(text.splitlines())

    def next_line(self) -> Optional[str]:
        if self._pending:
            line = self._pending.pop()
        else:
            line = next(self._it, None)
            if line is None:
                return None
        self.line_number += 1
        return line.rstrip("\r\n")

    def push_back(self, line: str) -> None:
        self._pending.append(line)
        self.line_number -= 1

    def __iter__(self) -> Iterator[str]:
        while True:
            line = self.next_line()
            if line is None:
                return
            yield line
