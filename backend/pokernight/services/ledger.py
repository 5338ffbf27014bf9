"""Balance arithmetic for players and tables.

Everything here is pure: the functions read the attributes of a player or
table snapshot (dataclass entities or ORM rows both work) and never touch
the database.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable


@dataclass(frozen=True)
class TableBalance:
    total_buy_ins: int
    accounted_for: int
    difference: int

    @property
    def status(self) -> str:
        """``balanced``, ``missing`` (money unaccounted for) or ``excess`` (over-counted)."""
        if self.difference > 0:
            return "missing"
        if self.difference < 0:
            return "excess"
        return "balanced"

    def as_dict(self) -> dict[str, Any]:
        return {
            "total_buy_ins": self.total_buy_ins,
            "accounted_for": self.accounted_for,
            "difference": self.difference,
            "status": self.status,
        }


def _amounts(records: Iterable[Any] | None) -> int:
    return sum(int(r.amount) for r in (records or ()))


def total_cash_out(player: Any) -> int:
    return _amounts(player.cash_outs)


def player_balance(player: Any) -> int:
    """Net result of a player: current chips plus withdrawals minus what they put in."""
    return int(player.chips or 0) + total_cash_out(player) - int(player.total_buy_in or 0)


def accounted_for(player: Any) -> int:
    # Inactive players have already been settled, their chips are zero
    if player.active:
        return int(player.chips or 0)
    return total_cash_out(player)


def table_balance(table: Any) -> TableBalance:
    players = list(table.players or ())
    total_buy_ins = sum(int(p.total_buy_in or 0) for p in players)
    accounted = sum(accounted_for(p) for p in players)
    return TableBalance(
        total_buy_ins=total_buy_ins,
        accounted_for=accounted,
        difference=total_buy_ins - accounted,
    )
