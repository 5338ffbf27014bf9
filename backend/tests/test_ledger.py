"""
Tests for player and table balance arithmetic
"""

from datetime import datetime

from pokernight.models.entities import BuyInEntity, CashOutEntity, PlayerEntity, TableEntity
from pokernight.services.ledger import player_balance, table_balance

TS = datetime(2026, 1, 1, 20, 0)


def _player(pid, chips, total_buy_in, active=True, cash_outs=()):
    return PlayerEntity(
        id=pid,
        name=pid,
        chips=chips,
        total_buy_in=total_buy_in,
        active=active,
        buy_ins=[BuyInEntity(id=f"b-{pid}", amount=total_buy_in, timestamp=TS)],
        cash_outs=[CashOutEntity(id=f"c-{pid}-{i}", amount=a, timestamp=TS) for i, a in enumerate(cash_outs)],
    )


def test_fresh_player_balance_is_zero():
    assert player_balance(_player("a", chips=100, total_buy_in=100)) == 0


def test_player_balance_counts_chips_and_cash_outs():
    winner = _player("a", chips=0, total_buy_in=100, active=False, cash_outs=[180])
    loser = _player("b", chips=40, total_buy_in=150)
    assert player_balance(winner) == 80
    assert player_balance(loser) == -110


def test_table_balance_uses_chips_for_active_and_cash_outs_for_inactive():
    table = TableEntity(
        id="t",
        name="t",
        group_id="g",
        players=[
            _player("a", chips=70, total_buy_in=50),
            # chips on an inactive player are ignored
            _player("b", chips=999, total_buy_in=100, active=False, cash_outs=[80]),
        ],
    )
    balance = table_balance(table)
    assert balance.total_buy_ins == 150
    assert balance.accounted_for == 150
    assert balance.difference == 0
    assert balance.status == "balanced"


def test_positive_difference_means_missing_money():
    table = TableEntity(
        id="t",
        name="t",
        group_id="g",
        players=[_player("a", chips=0, total_buy_in=100, active=False, cash_outs=[60])],
    )
    balance = table_balance(table)
    assert balance.difference == 40
    assert balance.status == "missing"


def test_negative_difference_means_excess():
    table = TableEntity(
        id="t",
        name="t",
        group_id="g",
        players=[_player("a", chips=130, total_buy_in=100)],
    )
    balance = table_balance(table)
    assert balance.difference == -30
    assert balance.status == "excess"


def test_empty_table_is_balanced():
    balance = table_balance(TableEntity(id="t", name="t", group_id="g"))
    assert (balance.total_buy_ins, balance.accounted_for, balance.difference) == (0, 0, 0)


def test_table_balance_does_not_depend_on_player_order():
    players = [
        _player("a", chips=10, total_buy_in=50),
        _player("b", chips=0, total_buy_in=20, active=False, cash_outs=[45]),
        _player("c", chips=15, total_buy_in=5),
    ]
    forward = table_balance(TableEntity(id="t", name="t", group_id="g", players=players))
    backward = table_balance(TableEntity(id="t", name="t", group_id="g", players=list(reversed(players))))
    assert forward == backward
    assert forward.as_dict() == {
        "total_buy_ins": 75,
        "accounted_for": 70,
        "difference": 5,
        "status": "missing",
    }
