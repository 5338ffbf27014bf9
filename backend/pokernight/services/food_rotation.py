"""Who orders food next.

Players are matched across past tables first by id and then by exact name,
since every table creates fresh player rows. A player renamed between
sessions therefore starts a new history.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable

logger = logging.getLogger(__name__)

MIN_PARTICIPATIONS = 3
TOP_CANDIDATES = 3


@dataclass
class FoodCandidate:
    player_id: str
    name: str
    participations: int
    food_orders: int
    food_order_percent: float
    last_order_time: datetime | None
    is_eligible: bool
    is_top_candidate: bool = False


def _food_player_name(table: Any) -> str | None:
    if not table.food:
        return None
    for p in table.players or ():
        if p.id == table.food:
            return p.name
    return None


def _sat_at(player: Any, table: Any) -> bool:
    return any(p.id == player.id or p.name == player.name for p in table.players or ())


def _name_key(c: FoodCandidate):
    # Case-insensitive, exact name breaks the tie
    return (c.name.casefold(), c.name)


def _eligible_sort_key(c: FoodCandidate):
    # None sorts before any timestamp
    last = (0, datetime.min) if c.last_order_time is None else (1, c.last_order_time)
    return (c.food_order_percent, last) + _name_key(c)


def rank_food_candidates(
    players: Iterable[Any],
    history: Iterable[Any],
    min_participations: int = MIN_PARTICIPATIONS,
    top_n: int = TOP_CANDIDATES,
) -> list[FoodCandidate]:
    """Order ``players`` by how overdue they are to order food.

    ``history`` should be the inactive tables of the same group as the
    current table. Eligible players (at least ``min_participations`` past
    games) come first, lowest order rate first, then the longest time since
    their last order, then by name. Newcomers follow alphabetically and are
    never flagged as top candidates.
    """
    past = [(t, _food_player_name(t)) for t in history]

    stats: list[FoodCandidate] = []
    for player in players:
        participations = sum(1 for t, _ in past if _sat_at(player, t))
        ordered = [t for t, food_name in past if food_name is not None and food_name == player.name]
        food_orders = len(ordered)
        last_order_time = max((t.created_at for t in ordered), default=None)
        stats.append(
            FoodCandidate(
                player_id=player.id,
                name=player.name,
                participations=participations,
                food_orders=food_orders,
                food_order_percent=food_orders / participations if participations > 0 else 0.0,
                last_order_time=last_order_time,
                is_eligible=participations >= min_participations,
            )
        )

    eligible = sorted((c for c in stats if c.is_eligible), key=_eligible_sort_key)
    newcomers = sorted((c for c in stats if not c.is_eligible), key=_name_key)

    for c in eligible[:top_n]:
        c.is_top_candidate = True

    logger.debug(
        f"Food ranking over {len(past)} past tables: "
        f"{len(eligible)} eligible, {len(newcomers)} new"
    )
    return eligible + newcomers
