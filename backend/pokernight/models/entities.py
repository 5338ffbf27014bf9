"""Read-only snapshots of a table and its ledger.

The ledger, validator and food ranker work on these instead of ORM rows so
they can be exercised without a database.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class BuyInEntity:
    id: str
    amount: int
    timestamp: datetime


@dataclass(frozen=True)
class CashOutEntity:
    id: str
    amount: int
    timestamp: datetime


@dataclass
class PlayerEntity:
    id: str
    name: str
    chips: int = 0
    total_buy_in: int = 0
    active: bool = True
    nickname: str | None = None
    show_me: bool = True
    buy_ins: list[BuyInEntity] = field(default_factory=list)
    cash_outs: list[CashOutEntity] = field(default_factory=list)


@dataclass
class TableEntity:
    id: str
    name: str
    group_id: str
    small_blind: int = 1
    big_blind: int = 1
    created_at: datetime = field(default_factory=datetime.utcnow)
    is_active: bool = True
    location: str | None = None
    food: str | None = None
    players: list[PlayerEntity] = field(default_factory=list)
