from __future__ import annotations

from decimal import Decimal
from typing import Iterable, List, Optional, Tuple

from .models import Statement, Transaction


def actual_totals(transactions: Iterable[Transaction]) -> Tuple[Decimal, Decimal]:
    """(créditos, débitos) recalculados; los débitos en valor absoluto."""
    credits = Decimal("0")
    debits = Decimal("0")
    for t in transactions:
        if t.amount > 0:
            credits += t.amount
        else:
            debits += -t.amount
    return credits, debits


def _compare(label: str, expected: Optional[Decimal], actual: Decimal) -> Optional[str]:
    if expected is None:
        return f"Monto resumen {label} no encontrado"
    # comparación exacta en Decimal
    if expected != actual:
        return f"{label}: esperado={expected:f}, actual={actual:f}"
    return None


def validate_statement(statement: Statement) -> List[str]:
    """
    Validación "bancaria" del statement parseado. Se evalúan todos los chequeos:
    - campos requeridos (periodo, saldo de apertura)
    - créditos/débitos recalculados == totales impresos en el resumen
    - transacciones sin fecha resuelta (se informa el conteo)
    Lista vacía => válido.
    """
    errors: List[str] = []

    if statement.date_from is None:
        errors.append("DATE FROM no encontrada")
    if statement.date_to is None:
        errors.append("DATE TO no encontrada")
    if statement.date_from and statement.date_to and statement.date_from > statement.date_to:
        errors.append(f"Periodo inválido: {statement.date_from} posterior a {statement.date_to}")

    if statement.opening_balance is None:
        errors.append("OPENING BALANCE no encontrado")

    credits, debits = actual_totals(statement.transactions)
    for label, expected, actual in (
        ("CREDITS", statement.total_credits, credits),
        ("DEBITS", statement.total_debits, debits),
    ):
        err = _compare(label, expected, actual)
        if err:
            errors.append(err)

    no_date = sum(1 for t in statement.transactions if t.date is None)
    if no_date > 0:
        errors.append(f"Fecha no encontrada en {no_date} transacciones")

    return errors
