"""
Tests for the table deactivation guards
"""

from datetime import datetime

import pytest

from pokernight.core.exceptions import ConflictError
from pokernight.models.entities import CashOutEntity, PlayerEntity, TableEntity
from pokernight.services.deactivation import ensure_can_deactivate, validate_deactivation

TS = datetime(2026, 3, 5, 23, 0)


def _cashed_out(name, total_buy_in, amount):
    return PlayerEntity(
        id=name,
        name=name,
        chips=0,
        total_buy_in=total_buy_in,
        active=False,
        cash_outs=[CashOutEntity(id=f"c-{name}", amount=amount, timestamp=TS)],
    )


def _table(*players):
    return TableEntity(id="t1", name="Friday", group_id="g", players=list(players))


def test_all_settled_table_can_be_deactivated():
    table = _table(_cashed_out("A", 100, 100), _cashed_out("B", 50, 50))

    check = validate_deactivation(table)

    assert check.all_players_inactive is True
    assert check.is_balance_matching is True
    assert check.balance.total_buy_ins == 150
    assert check.balance.accounted_for == 150
    assert check.balance.difference == 0
    assert check.can_deactivate
    assert check.failed_guards == []
    assert ensure_can_deactivate(table) == check


def test_active_player_blocks_even_when_balance_matches():
    active = PlayerEntity(id="A", name="A", chips=50, total_buy_in=50, active=True)
    table = _table(active, _cashed_out("B", 50, 50))

    check = validate_deactivation(table)

    assert check.balance.difference == 0
    assert check.is_balance_matching is True
    assert check.all_players_inactive is False
    assert check.active_players == ["A"]
    assert check.failed_guards == ["players_active"]


def test_mismatch_reports_difference_and_direction():
    table = _table(_cashed_out("A", 100, 80))

    with pytest.raises(ConflictError) as exc_info:
        ensure_can_deactivate(table)

    details = exc_info.value.details
    assert details["failed_guards"] == ["balance_mismatch"]
    assert details["difference"] == 20
    assert details["direction"] == "missing"


def test_both_guards_fail_together():
    active = PlayerEntity(id="A", name="A", chips=10, total_buy_in=40, active=True)
    table = _table(active, _cashed_out("B", 20, 60))

    with pytest.raises(ConflictError) as exc_info:
        ensure_can_deactivate(table)

    details = exc_info.value.details
    assert details["failed_guards"] == ["players_active", "balance_mismatch"]
    assert details["active_players"] == ["A"]
    assert details["difference"] == -10
    assert details["direction"] == "excess"


def test_dry_run_does_not_touch_the_table():
    player = PlayerEntity(id="A", name="A", chips=10, total_buy_in=10, active=True)
    table = _table(player)

    validate_deactivation(table)

    assert table.is_active is True
    assert player.active is True
    assert player.chips == 10


def test_table_without_players_passes():
    check = validate_deactivation(_table())
    assert check.can_deactivate
