from __future__ import annotations

from typing import List, Sequence


class ExtractorError(RuntimeError):
    pass


class ExtractionError(ExtractorError):
    """Falla la herramienta externa de PDF a texto. Es fatal para toda la corrida."""


class ParseError(ExtractorError):
    pass


class UnterminatedTransactionError(ParseError):
    def __init__(self, first_line: str, line_number: int, consumed: int, reason: str):
        self.first_line = first_line
        self.line_number = line_number
        self.consumed = consumed
        super().__init__(
            f"Línea {line_number}: transacción sin terminar ({reason}) tras {consumed} líneas: {first_line!r}"
        )


class StatementInvalidError(ExtractorError):
    def __init__(self, account: str, number: int, errors: Sequence[str]):
        self.account = account
        self.number = number
        self.errors: List[str] = list(errors)
        super().__init__(f"Statement {number} de {account} con {len(self.errors)} errores")
