from __future__ import annotations

import logging
import datetime
from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from .classify import (
    AMOUNT_PAIR_RE,
    CLOSING_BALANCE_RE,
    LEGACY_SUMMARY_RE,
    ClassifiedLine,
    LineKind,
    classify_line,
    parse_money,
    sign_of,
)
from .dates import make_date, resolve_date
from .errors import UnterminatedTransactionError
from .lines import LineSource
from .models import Statement, StatementDraft, Transaction


logger = logging.getLogger(__name__)

DEFAULT_MAX_CONTINUATION_LINES = 10


class Mode(Enum):
    SCANNING = "scanning"
    READING_TRANSACTIONS = "reading_transactions"
    DONE = "done"


@dataclass(frozen=True)
class ParserState:
    mode: Mode = Mode.SCANNING
    running_balance: Optional[Decimal] = None
    date_cursor: Optional[datetime.date] = None


def parse_statement(
    source: LineSource,
    max_continuation_lines: int = DEFAULT_MAX_CONTINUATION_LINES,
) -> Statement:
    """
    Recorre las líneas del statement (formato viejo o nuevo) y arma el Statement.
    Las líneas no reconocidas se ignoran; la falta de campos la detecta el validador.
    """
    draft = StatementDraft()
    state = ParserState()

    while state.mode is not Mode.DONE:
        line = source.next_line()
        if line is None:
            break
        state = step(state, draft, classify_line(line), source, max_continuation_lines)

    if draft.closing_balance is not None:
        logger.debug("Saldo de cierre impreso: %s", draft.closing_balance)
    return draft.freeze()


def parse_text(text: str, max_continuation_lines: int = DEFAULT_MAX_CONTINUATION_LINES) -> Statement:
    return parse_statement(LineSource.from_text(text), max_continuation_lines)


def step(
    state: ParserState,
    draft: StatementDraft,
    classified: ClassifiedLine,
    source: LineSource,
    max_continuation_lines: int = DEFAULT_MAX_CONTINUATION_LINES,
) -> ParserState:
    """Función de transición: aplica una línea clasificada y devuelve el nuevo estado."""
    kind = classified.kind
    m = classified.match

    if kind is LineKind.LEGACY_SUMMARY_HEADER:
        # los datos vienen en la línea siguiente
        data_line = source.next_line()
        if data_line is None:
            return state
        sm = LEGACY_SUMMARY_RE.match(data_line)
        if not sm:
            source.push_back(data_line)
            return state
        draft.opening_balance = parse_money(sm.group(2)) * sign_of(sm.group(1))
        draft.total_credits = parse_money(sm.group(3))
        draft.total_debits = parse_money(sm.group(4))
        draft.closing_balance = parse_money(sm.group(6)) * sign_of(sm.group(5))
        logger.debug("Resumen (formato viejo): apertura=%s", draft.opening_balance)
        return replace(state, mode=Mode.READING_TRANSACTIONS, running_balance=draft.opening_balance)

    if kind in (LineKind.LEGACY_PERIOD, LineKind.MODERN_PERIOD):
        try:
            draft.date_from = make_date(m.group(1), m.group(2), m.group(3))
            draft.date_to = make_date(m.group(4), m.group(5), m.group(6))
        except ValueError:
            logger.debug("Periodo ilegible, se ignora: %r", classified.line)
            return state
        logger.debug("Periodo: %s -> %s", draft.date_from, draft.date_to)
        # el encabezado se repite por página: el cursor nunca retrocede
        if state.date_cursor is not None and state.date_cursor >= draft.date_from:
            return state
        return replace(state, date_cursor=draft.date_from)

    if kind is LineKind.MODERN_OPENING_BALANCE:
        draft.opening_balance = parse_money(m.group(2)) * sign_of(m.group(1))
        return replace(state, running_balance=draft.opening_balance)

    if kind is LineKind.MODERN_CREDITS_TOTAL:
        draft.total_credits = parse_money(m.group(1))
        return state

    if kind is LineKind.MODERN_DEBITS_TOTAL:
        draft.total_debits = parse_money(m.group(1))
        return state

    if kind is LineKind.MODERN_COLUMN_HEADER:
        if state.mode is Mode.SCANNING:
            return replace(state, mode=Mode.READING_TRANSACTIONS)
        return state

    if kind is LineKind.TRANSACTION_ROW and state.mode is Mode.READING_TRANSACTIONS:
        return _read_transaction(state, draft, classified, source, max_continuation_lines)

    return state


def _read_transaction(
    state: ParserState,
    draft: StatementDraft,
    classified: ClassifiedLine,
    source: LineSource,
    max_continuation_lines: int,
) -> ParserState:
    day, month, frag = classified.match.group(1), classified.match.group(2), classified.match.group(3)
    row_number = source.line_number

    if CLOSING_BALANCE_RE.match(frag):
        return replace(state, mode=Mode.DONE)

    # descripción multilínea: se absorben líneas hasta encontrar "monto saldo"
    parts: List[str] = []
    extra = 0
    while True:
        pm = AMOUNT_PAIR_RE.match(frag)
        if pm:
            parts.append(pm.group(1).strip())
            break
        parts.append(frag.strip())
        if extra >= max_continuation_lines:
            raise UnterminatedTransactionError(classified.line, row_number, extra + 1, "límite de líneas")
        nxt = source.next_line()
        if nxt is None:
            raise UnterminatedTransactionError(classified.line, row_number, extra + 1, "fin del input")
        frag = nxt
        extra += 1

    magnitude = abs(parse_money(pm.group(2)))
    new_balance = parse_money(pm.group(3))
    previous = state.running_balance if state.running_balance is not None else Decimal("0")
    amount = magnitude if new_balance > previous else -magnitude

    resolved = resolve_date(int(day), month, state.date_cursor, draft.date_to)
    if resolved is None:
        logger.debug(
            "Línea %d: fecha sin resolver %s %s (cursor=%s)", row_number, day, month, state.date_cursor
        )

    draft.transactions.append(
        Transaction(date=resolved, amount=amount, description_parts=tuple(parts))
    )
    logger.debug("Transacción %s %s saldo=%s", resolved, amount, new_balance)

    return replace(
        state,
        running_balance=new_balance,
        date_cursor=resolved if resolved is not None else state.date_cursor,
    )
