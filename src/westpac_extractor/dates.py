from __future__ import annotations

import datetime
from typing import Optional


MONTHS = {
    "JAN": 1,
    "FEB": 2,
    "MAR": 3,
    "APR": 4,
    "MAY": 5,
    "JUN": 6,
    "JUL": 7,
    "AUG": 8,
    "SEP": 9,
    "OCT": 10,
    "NOV": 11,
    "DEC": 12,
}

_ONE_DAY = datetime.timedelta(days=1)


def month_number(abbrev: str) -> Optional[int]:
    return MONTHS.get(abbrev.strip().upper())


def make_date(day: str, month_abbrev: str, year: str) -> datetime.date:
    """Fecha completa impresa (periodo del statement), p.ej. '28', 'Dec', '2022'."""
    month = month_number(month_abbrev)
    if month is None:
        raise ValueError(f"Mes desconocido: {month_abbrev!r}")
    return datetime.date(int(year), month, int(day))


def resolve_date(
    day: int,
    month_abbrev: str,
    search_start: Optional[datetime.date],
    search_end: Optional[datetime.date],
) -> Optional[datetime.date]:
    """
    Busca la próxima fecha DD/MON dentro de [search_start, search_end].
    Las filas solo traen día y mes: recorrer día por día desde el cursor es lo
    que asigna el año, incluso si el periodo cruza el año nuevo.
    No es correcto si hay transacciones fuera de orden o DD/MON repetidos en la
    ventana. Devuelve None si no hay coincidencia.
    """
    month = month_number(month_abbrev)
    if month is None or search_start is None or search_end is None:
        return None

    current = search_start
    while current <= search_end:
        if current.day == day and current.month == month:
            return current
        current += _ONE_DAY
    return None
