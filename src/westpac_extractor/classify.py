from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional, Pattern, Tuple

from .dates import MONTHS


class LineKind(Enum):
    LEGACY_SUMMARY_HEADER = "legacy_summary_header"
    LEGACY_PERIOD = "legacy_period"
    MODERN_OPENING_BALANCE = "modern_opening_balance"
    MODERN_CREDITS_TOTAL = "modern_credits_total"
    MODERN_DEBITS_TOTAL = "modern_debits_total"
    MODERN_PERIOD = "modern_period"
    MODERN_COLUMN_HEADER = "modern_column_header"
    TRANSACTION_ROW = "transaction_row"
    UNRECOGNIZED = "unrecognized"


_MONEY = r"[\d,]+\.\d{2}"

# Formato viejo
LEGACY_SUMMARY_HEADER_RE = re.compile(
    r"OPENING BALANCE\s*TOTAL CREDITS\s*TOTAL DEBITS\s*CLOSING BALANCE"
)
# Línea de ancho fijo: "- $100.00   $250.00   $180.00   + $170.00"
LEGACY_SUMMARY_RE = re.compile(
    rf"^\s*(.) \$({_MONEY})\s*\$({_MONEY})\s*\$({_MONEY})\s*(.) \$({_MONEY})\s*$"
)
LEGACY_PERIOD_RE = re.compile(
    r"(?:FOR THE PERIOD FROM|FROM LAST STATEMENT DATED)\s*(\d+) (\w{3}) (\d+)\s*TO\s*(\d+) (\w{3}) (\d+)",
    re.IGNORECASE,
)

# Formato nuevo
MODERN_OPENING_BALANCE_RE = re.compile(rf"Opening Balance\s*([+\-]?) \$({_MONEY})\s*$")
MODERN_CREDITS_RE = re.compile(rf"Total credits\s*[+\-] \$({_MONEY})\s*$")
MODERN_DEBITS_RE = re.compile(rf"Total debits\s*[+\-] \$({_MONEY})\s*$")
MODERN_PERIOD_RE = re.compile(
    r"From Last Statement Dated\s*(\d{1,2}) (\w{3}) (\d{4})\s*to\s*(\d{1,2}) ([A-Z][a-z]{2}) (\d{4})",
    re.IGNORECASE,
)
MODERN_COLUMN_HEADER_RE = re.compile(
    r"^\s*Date\s*Description of transaction\s*Debit\s*Credit\s*Balance\s*$",
    re.IGNORECASE,
)

# Ambos formatos
_MONTH_CODES = "|".join(MONTHS)
TRANSACTION_ROW_RE = re.compile(
    rf"^\s*(\d{{2}})\s*((?i:{_MONTH_CODES}))(?![A-Za-z])\s*(.*?)\s*$"
)
CLOSING_BALANCE_RE = re.compile(r"^CLOSING BALANCE")
# "<descripción> <monto> <nuevo saldo>" al final del fragmento
AMOUNT_PAIR_RE = re.compile(r"^\s*(.*?)\s*(-?[\d,]+\.\d{2})\s+(-?[\d,]+\.\d{2})\s*$")


# Orden fijo: gana el primero que coincide
CLASSIFIERS: Tuple[Tuple[LineKind, Pattern[str]], ...] = (
    (LineKind.LEGACY_SUMMARY_HEADER, LEGACY_SUMMARY_HEADER_RE),
    (LineKind.LEGACY_PERIOD, LEGACY_PERIOD_RE),
    (LineKind.MODERN_OPENING_BALANCE, MODERN_OPENING_BALANCE_RE),
    (LineKind.MODERN_CREDITS_TOTAL, MODERN_CREDITS_RE),
    (LineKind.MODERN_DEBITS_TOTAL, MODERN_DEBITS_RE),
    (LineKind.MODERN_PERIOD, MODERN_PERIOD_RE),
    (LineKind.MODERN_COLUMN_HEADER, MODERN_COLUMN_HEADER_RE),
    (LineKind.TRANSACTION_ROW, TRANSACTION_ROW_RE),
)


@dataclass(frozen=True)
class ClassifiedLine:
    kind: LineKind
    line: str
    match: Optional["re.Match[str]"] = None


def classify_line(line: str) -> ClassifiedLine:
    for kind, pattern in CLASSIFIERS:
        m = pattern.search(line)
        if m:
            return ClassifiedLine(kind=kind, line=line, match=m)
    return ClassifiedLine(kind=LineKind.UNRECOGNIZED, line=line)


def parse_money(raw: str) -> Decimal:
    """'1,234.56' -> Decimal('1234.56'); se aceptan separadores de miles."""
    return Decimal(raw.replace(",", ""))


def sign_of(marker: str) -> int:
    return -1 if marker == "-" else 1
