from __future__ import annotations

import datetime as dt
import logging
from typing import Any

from sqlalchemy.orm import Session as DBSession

from ..core.config import settings
from ..core.exceptions import ErrorMessages, ValidationError
from ..models.db import BuyIn, CashOut, Player, Table
from .deactivation import DeactivationCheck, ensure_can_deactivate, validate_deactivation
from .food_rotation import FoodCandidate, rank_food_candidates
from .ledger import TableBalance, player_balance, table_balance
from .repositories import GroupRepo, PlayerRepo, TableRepo, commit, flush, table_entity

logger = logging.getLogger(__name__)


def _normalize(v: str | None) -> str:
    return (v or "").strip().lower()


def _validate_blinds(small_blind: int, big_blind: int) -> None:
    if small_blind is None or big_blind is None or small_blind <= 0 or big_blind < small_blind:
        raise ValidationError(
            ErrorMessages.INVALID_BLINDS,
            details={"small_blind": small_blind, "big_blind": big_blind},
        )


class TableService:
    # -------- Tables --------

    @staticmethod
    def create_table(
        db: DBSession,
        name: str,
        small_blind: int,
        big_blind: int,
        group_id: str,
        location: str | None = None,
        created_at: dt.datetime | None = None,
        creator_id: str | None = None,
    ) -> Table:
        name = (name or "").strip()
        if not name:
            raise ValidationError(ErrorMessages.NAME_REQUIRED)
        _validate_blinds(small_blind, big_blind)
        GroupRepo.require(db, group_id)

        table = Table(
            name=name,
            small_blind=small_blind,
            big_blind=big_blind,
            location=location,
            group_id=group_id,
            creator_id=creator_id,
            is_active=True,
        )
        if created_at is not None:
            table.created_at = created_at
        db.add(table)
        commit(db)
        logger.info(f"Table created: {table.id} '{name}' in group {group_id}")
        return TableRepo.require(db, table.id)

    @staticmethod
    def get_table(db: DBSession, table_id: str) -> Table:
        return TableRepo.require(db, table_id)

    @staticmethod
    def list_tables(db: DBSession) -> list[Table]:
        return TableRepo.list_all(db)

    @staticmethod
    def update_table(db: DBSession, table_id: str, changes: dict[str, Any]) -> Table:
        """Apply a partial update. Keys mirror the Table columns."""
        table = TableRepo.require(db, table_id)

        if "name" in changes:
            name = (changes["name"] or "").strip()
            if not name:
                raise ValidationError(ErrorMessages.NAME_REQUIRED)
            table.name = name

        small_blind = changes.get("small_blind", table.small_blind)
        big_blind = changes.get("big_blind", table.big_blind)
        _validate_blinds(small_blind, big_blind)
        table.small_blind = small_blind
        table.big_blind = big_blind

        if "location" in changes:
            table.location = changes["location"]
        if changes.get("created_at") is not None:
            table.created_at = changes["created_at"]
        if changes.get("group_id") is not None:
            GroupRepo.require(db, changes["group_id"])
            table.group_id = changes["group_id"]
        if "food" in changes:
            TableService._check_food(table, changes["food"])
            table.food = changes["food"] or None

        commit(db)
        logger.info(f"Table updated: {table_id} fields={sorted(changes)}")
        return TableRepo.require(db, table_id)

    @staticmethod
    def delete_table(db: DBSession, table_id: str) -> None:
        table = TableRepo.require(db, table_id)
        db.delete(table)
        commit(db)
        logger.info(f"Table deleted: {table_id}")

    @staticmethod
    def _check_food(table: Table, player_id: str | None) -> None:
        if player_id and not any(p.id == player_id for p in table.players):
            raise ValidationError(
                ErrorMessages.FOOD_PLAYER_NOT_AT_TABLE,
                details={"table_id": table.id, "player_id": player_id},
            )

    @staticmethod
    def set_food(db: DBSession, table_id: str, player_id: str | None) -> Table:
        table = TableRepo.require(db, table_id)
        TableService._check_food(table, player_id)
        table.food = player_id or None
        commit(db)
        logger.info(f"Food assigned on table {table_id}: {player_id}")
        return TableRepo.require(db, table_id)

    @staticmethod
    def toggle_table_status(db: DBSession, table_id: str) -> Table:
        table = TableRepo.require(db, table_id)
        if not table.is_active:
            # Reopening is always allowed
            table.is_active = True
        else:
            ensure_can_deactivate(table_entity(table))
            table.is_active = False
        commit(db)
        logger.info(f"Table {table_id} is now {'active' if table.is_active else 'inactive'}")
        return TableRepo.require(db, table_id)

    # -------- Ledger queries --------

    @staticmethod
    def get_table_balance(db: DBSession, table_id: str) -> TableBalance:
        return table_balance(table_entity(TableRepo.require(db, table_id)))

    @staticmethod
    def get_player_balance(db: DBSession, table_id: str, player_id: str) -> int:
        return player_balance(PlayerRepo.require(db, table_id, player_id))

    @staticmethod
    def validate_deactivation(db: DBSession, table_id: str) -> DeactivationCheck:
        return validate_deactivation(table_entity(TableRepo.require(db, table_id)))

    @staticmethod
    def rank_food_candidates(db: DBSession, table_id: str) -> list[FoodCandidate]:
        table = TableRepo.require(db, table_id)
        history = TableRepo.list_inactive_for_group(db, table.group_id)
        return rank_food_candidates(
            table_entity(table).players,
            [table_entity(t) for t in history],
            min_participations=settings.FOOD_MIN_PARTICIPATIONS,
            top_n=settings.FOOD_TOP_CANDIDATES,
        )

    @staticmethod
    def list_statistics_player_names(db: DBSession) -> list[str]:
        rows = (
            db.query(Player.name)
            .join(Table, Player.table_id == Table.id)
            .filter(Table.is_active.is_(False))
            .distinct()
            .order_by(Player.name.asc())
            .all()
        )
        return [r[0] for r in rows]

    # -------- Players --------

    @staticmethod
    def add_player(
        db: DBSession,
        table_id: str,
        name: str,
        initial_chips: int = 0,
        nickname: str | None = None,
        show_me: bool = True,
    ) -> Player:
        table = TableRepo.require(db, table_id)
        name = (name or "").strip()
        if not name:
            raise ValidationError(ErrorMessages.NAME_REQUIRED)
        if initial_chips is None or initial_chips < 0:
            raise ValidationError(ErrorMessages.INITIAL_CHIPS_NEGATIVE, details={"initial_chips": initial_chips})

        key = (_normalize(name), _normalize(nickname))
        for p in table.players:
            if (_normalize(p.name), _normalize(p.nickname)) == key:
                raise ValidationError(
                    ErrorMessages.DUPLICATE_PLAYER,
                    details={"name": name, "nickname": nickname, "player_id": p.id},
                )

        player = Player(
            table_id=table.id,
            name=name,
            nickname=nickname,
            chips=initial_chips,
            total_buy_in=initial_chips,
            active=True,
            show_me=show_me,
        )
        # Recorded even for zero chips
        player.buy_ins.append(BuyIn(amount=initial_chips))
        db.add(player)
        commit(db)
        logger.info(f"Player added: table={table_id} player={player.id} name={name} chips={initial_chips}")
        return PlayerRepo.require(db, table_id, player.id)

    @staticmethod
    def add_buy_in(db: DBSession, table_id: str, player_id: str, amount: int) -> Player:
        if amount is None or amount <= 0:
            raise ValidationError(ErrorMessages.BUY_IN_NOT_POSITIVE, details={"amount": amount})
        player = PlayerRepo.require(db, table_id, player_id)

        player.buy_ins.append(BuyIn(amount=amount))
        player.chips = int(player.chips or 0) + amount
        player.total_buy_in = int(player.total_buy_in or 0) + amount
        commit(db)
        logger.info(f"Buy-in: player={player_id} amount={amount}")
        return PlayerRepo.require(db, table_id, player_id)

    @staticmethod
    def cash_out(db: DBSession, table_id: str, player_id: str, amount: int) -> Player:
        if amount is None or amount < 0:
            raise ValidationError(ErrorMessages.CASH_OUT_NEGATIVE, details={"amount": amount})
        player = PlayerRepo.require(db, table_id, player_id)

        chips = int(player.chips or 0)
        if player.active and amount != chips:
            # Not rejected, shows up in the table balance
            logger.warning(f"Cash-out for player {player_id} is {amount} while chips are {chips}")

        replaced = len(player.cash_outs)
        player.cash_outs.clear()
        # Flush the delete before inserting, the unit of work would otherwise insert first
        flush(db)
        player.cash_outs.append(CashOut(amount=amount))
        player.active = False
        player.chips = 0
        commit(db)
        logger.info(f"Cash-out: player={player_id} amount={amount} replaced={replaced}")
        return PlayerRepo.require(db, table_id, player_id)

    @staticmethod
    def update_chips(db: DBSession, table_id: str, player_id: str, chips: int) -> Player:
        """Record a player's current stack during play. Buy-ins are untouched."""
        if chips is None or chips < 0:
            raise ValidationError(ErrorMessages.CHIPS_NEGATIVE, details={"chips": chips})
        player = PlayerRepo.require(db, table_id, player_id)
        if not player.active:
            raise ValidationError(ErrorMessages.PLAYER_CASHED_OUT, details={"player_id": player_id})

        previous = int(player.chips or 0)
        player.chips = chips
        commit(db)
        logger.info(f"Chips updated: player={player_id} {previous} -> {chips}")
        return PlayerRepo.require(db, table_id, player_id)

    @staticmethod
    def remove_player(db: DBSession, table_id: str, player_id: str) -> None:
        player = PlayerRepo.require(db, table_id, player_id)
        table = TableRepo.require(db, table_id)
        if table.food == player_id:
            table.food = None
        db.delete(player)
        commit(db)
        logger.info(f"Player removed: table={table_id} player={player_id}")

    @staticmethod
    def reactivate_player(db: DBSession, table_id: str, player_id: str) -> Player:
        player = PlayerRepo.require(db, table_id, player_id)
        player.active = True
        commit(db)
        logger.info(f"Player reactivated: table={table_id} player={player_id}")
        return PlayerRepo.require(db, table_id, player_id)

    @staticmethod
    def set_show_me(db: DBSession, table_id: str, player_id: str, show_me: bool) -> Player:
        player = PlayerRepo.require(db, table_id, player_id)
        player.show_me = show_me
        commit(db)
        logger.info(f"Show-me set: player={player_id} show_me={show_me}")
        return PlayerRepo.require(db, table_id, player_id)
