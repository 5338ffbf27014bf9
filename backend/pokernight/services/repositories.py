"""
Data access for tables and their ledgers.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from ..core.exceptions import ConflictError, ErrorMessages, NotFoundError, StoreError
from ..models.db import BuyIn, CashOut, Group, Player, Table
from ..models.entities import BuyInEntity, CashOutEntity, PlayerEntity, TableEntity

logger = logging.getLogger(__name__)


def _write(db: Session, action: str) -> None:
    """Run ``db.commit`` or ``db.flush``, translating driver failures into domain errors."""
    try:
        getattr(db, action)()
    except IntegrityError as e:
        db.rollback()
        logger.error(f"Integrity error on {action}: {e}")
        raise ConflictError(ErrorMessages.CONCURRENT_UPDATE, details={"reason": str(e.orig)})
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error on {action}: {e}")
        raise StoreError(ErrorMessages.STORE_FAILURE, details={"reason": str(e)})


def commit(db: Session) -> None:
    _write(db, "commit")


def flush(db: Session) -> None:
    _write(db, "flush")


def _with_ledger(query):
    return query.options(
        selectinload(Table.players).selectinload(Player.buy_ins),
        selectinload(Table.players).selectinload(Player.cash_outs),
    )


class TableRepo:
    @staticmethod
    def get(db: Session, table_id: str) -> Optional[Table]:
        return _with_ledger(db.query(Table)).filter(Table.id == table_id).first()

    @staticmethod
    def require(db: Session, table_id: str) -> Table:
        table = TableRepo.get(db, table_id)
        if table is None:
            raise NotFoundError(ErrorMessages.TABLE_NOT_FOUND, details={"table_id": table_id})
        return table

    @staticmethod
    def list_all(db: Session) -> List[Table]:
        return _with_ledger(db.query(Table)).order_by(Table.created_at.desc()).all()

    @staticmethod
    def list_inactive_for_group(db: Session, group_id: str) -> List[Table]:
        return (
            _with_ledger(db.query(Table))
            .filter(Table.group_id == group_id, Table.is_active.is_(False))
            .order_by(Table.created_at.asc())
            .all()
        )


class PlayerRepo:
    @staticmethod
    def require(db: Session, table_id: str, player_id: str) -> Player:
        player = (
            db.query(Player)
            .options(selectinload(Player.buy_ins), selectinload(Player.cash_outs))
            .filter(Player.id == player_id, Player.table_id == table_id)
            .first()
        )
        if player is None:
            raise NotFoundError(
                ErrorMessages.PLAYER_NOT_FOUND,
                details={"table_id": table_id, "player_id": player_id},
            )
        return player


class GroupRepo:
    @staticmethod
    def require(db: Session, group_id: str) -> Group:
        group = db.query(Group).filter(Group.id == group_id).first()
        if group is None:
            raise NotFoundError(ErrorMessages.GROUP_NOT_FOUND, details={"group_id": group_id})
        return group


# -------- Snapshots --------

def buy_in_entity(b: BuyIn) -> BuyInEntity:
    return BuyInEntity(id=b.id, amount=int(b.amount), timestamp=b.timestamp)


def cash_out_entity(c: CashOut) -> CashOutEntity:
    return CashOutEntity(id=c.id, amount=int(c.amount), timestamp=c.timestamp)


def player_entity(p: Player) -> PlayerEntity:
    return PlayerEntity(
        id=p.id,
        name=p.name,
        nickname=p.nickname,
        chips=int(p.chips or 0),
        total_buy_in=int(p.total_buy_in or 0),
        active=bool(p.active),
        show_me=bool(p.show_me),
        buy_ins=[buy_in_entity(b) for b in p.buy_ins],
        cash_outs=[cash_out_entity(c) for c in p.cash_outs],
    )


def table_entity(t: Table) -> TableEntity:
    return TableEntity(
        id=t.id,
        name=t.name,
        group_id=t.group_id,
        small_blind=int(t.small_blind),
        big_blind=int(t.big_blind),
        created_at=t.created_at,
        is_active=bool(t.is_active),
        location=t.location,
        food=t.food,
        players=[player_entity(p) for p in t.players],
    )
