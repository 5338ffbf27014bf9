"""Guards for closing a table."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from ..core.exceptions import ConflictError, ErrorMessages
from .ledger import TableBalance, table_balance

logger = logging.getLogger(__name__)

GUARD_PLAYERS_ACTIVE = "players_active"
GUARD_BALANCE_MISMATCH = "balance_mismatch"


@dataclass(frozen=True)
class DeactivationCheck:
    all_players_inactive: bool
    is_balance_matching: bool
    balance: TableBalance
    active_players: list[str] = field(default_factory=list)

    @property
    def can_deactivate(self) -> bool:
        return self.all_players_inactive and self.is_balance_matching

    @property
    def failed_guards(self) -> list[str]:
        failed = []
        if not self.all_players_inactive:
            failed.append(GUARD_PLAYERS_ACTIVE)
        if not self.is_balance_matching:
            failed.append(GUARD_BALANCE_MISMATCH)
        return failed

    def as_dict(self) -> dict[str, Any]:
        return {
            "all_players_inactive": self.all_players_inactive,
            "is_balance_matching": self.is_balance_matching,
            "balance": self.balance.as_dict(),
            "active_players": list(self.active_players),
            "can_deactivate": self.can_deactivate,
            "failed_guards": self.failed_guards,
        }


def validate_deactivation(table: Any) -> DeactivationCheck:
    """Dry run of the deactivation guards. Never mutates ``table``."""
    players = list(table.players or ())
    active = [p.name for p in players if p.active]
    balance = table_balance(table)
    return DeactivationCheck(
        all_players_inactive=not active,
        is_balance_matching=balance.difference == 0,
        balance=balance,
        active_players=active,
    )


def ensure_can_deactivate(table: Any) -> DeactivationCheck:
    check = validate_deactivation(table)
    if check.can_deactivate:
        return check

    balance = check.balance
    logger.warning(
        f"Deactivation rejected for table {table.id}: guards={check.failed_guards} "
        f"difference={balance.difference} ({balance.status})"
    )
    raise ConflictError(
        ErrorMessages.DEACTIVATION_REJECTED,
        details={
            "failed_guards": check.failed_guards,
            "active_players": list(check.active_players),
            "total_buy_ins": balance.total_buy_ins,
            "accounted_for": balance.accounted_for,
            "difference": balance.difference,
            "direction": balance.status,
        },
    )
