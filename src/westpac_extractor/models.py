from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class Transaction(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: Optional[datetime.date] = Field(None, description="None si no se pudo resolver el año")
    amount: Decimal = Field(..., description="Signed amount. Negative=debit, Positive=credit")
    description_parts: Tuple[str, ...] = ()

    @property
    def description(self) -> str:
        return "\n".join(self.description_parts)


class Statement(BaseModel):
    model_config = ConfigDict(frozen=True)

    date_from: Optional[datetime.date] = None
    date_to: Optional[datetime.date] = None
    opening_balance: Optional[Decimal] = None
    total_credits: Optional[Decimal] = None
    total_debits: Optional[Decimal] = None
    transactions: Tuple[Transaction, ...] = ()


@dataclass
class StatementDraft:
    """
    Estado mutable de un statement mientras se parsea.
    closing_balance solo sirve de referencia (formato viejo), no se publica.
    """
    date_from: Optional[datetime.date] = None
    date_to: Optional[datetime.date] = None
    opening_balance: Optional[Decimal] = None
    closing_balance: Optional[Decimal] = None
    total_credits: Optional[Decimal] = None
    total_debits: Optional[Decimal] = None
    transactions: List[Transaction] = field(default_factory=list)

    def freeze(self) -> Statement:
        return Statement(
            date_from=self.date_from,
            date_to=self.date_to,
            opening_balance=self.opening_balance,
            total_credits=self.total_credits,
            total_debits=self.total_debits,
            transactions=tuple(self.transactions),
        )
