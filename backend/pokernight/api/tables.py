from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session as DBSession

from ..core.deps import ADMIN_ONLY, EDITORS, get_current_user, get_db, require_roles
from ..models.db import User
from ..models.schemas import (
    BuyInIn,
    CashOutIn,
    ChipsIn,
    DeactivationCheckOut,
    FoodCandidateOut,
    FoodIn,
    MessageOut,
    PlayerBalanceOut,
    PlayerCreateIn,
    PlayerOut,
    ShowMeIn,
    TableBalanceOut,
    TableCreateIn,
    TableOut,
    TableUpdateIn,
)
from ..services.table_service import TableService

router = APIRouter(prefix="/api/tables", tags=["tables"])


@router.get("", response_model=list[TableOut], dependencies=[Depends(get_current_user)])
def list_tables(db: DBSession = Depends(get_db)):
    return [TableOut.model_validate(t) for t in TableService.list_tables(db)]


@router.post("", response_model=TableOut, status_code=201)
def create_table(
    payload: TableCreateIn,
    db: DBSession = Depends(get_db),
    user: User = Depends(require_roles(*ADMIN_ONLY)),
):
    t = TableService.create_table(
        db,
        name=payload.name,
        small_blind=payload.small_blind,
        big_blind=payload.big_blind,
        group_id=payload.group_id,
        location=payload.location,
        created_at=payload.created_at,
        creator_id=str(user.id),
    )
    return TableOut.model_validate(t)


@router.get("/{table_id}", response_model=TableOut, dependencies=[Depends(get_current_user)])
def get_table(table_id: str, db: DBSession = Depends(get_db)):
    return TableOut.model_validate(TableService.get_table(db, table_id))


@router.put("/{table_id}", response_model=TableOut, dependencies=[Depends(require_roles(*EDITORS))])
def update_table(table_id: str, payload: TableUpdateIn, db: DBSession = Depends(get_db)):
    t = TableService.update_table(db, table_id, payload.model_dump(exclude_unset=True))
    return TableOut.model_validate(t)


@router.delete("/{table_id}", response_model=MessageOut, dependencies=[Depends(require_roles(*ADMIN_ONLY))])
def delete_table(table_id: str, db: DBSession = Depends(get_db)):
    TableService.delete_table(db, table_id)
    return MessageOut(message="Table deleted")


@router.put("/{table_id}/status", response_model=TableOut, dependencies=[Depends(require_roles(*EDITORS))])
def toggle_table_status(table_id: str, db: DBSession = Depends(get_db)):
    return TableOut.model_validate(TableService.toggle_table_status(db, table_id))


@router.get("/{table_id}/balance", response_model=TableBalanceOut, dependencies=[Depends(get_current_user)])
def get_table_balance(table_id: str, db: DBSession = Depends(get_db)):
    return TableBalanceOut(**TableService.get_table_balance(db, table_id).as_dict())


@router.get(
    "/{table_id}/deactivation-check",
    response_model=DeactivationCheckOut,
    dependencies=[Depends(get_current_user)],
)
def validate_deactivation(table_id: str, db: DBSession = Depends(get_db)):
    return DeactivationCheckOut(**TableService.validate_deactivation(db, table_id).as_dict())


@router.get(
    "/{table_id}/food-candidates",
    response_model=list[FoodCandidateOut],
    dependencies=[Depends(get_current_user)],
)
def rank_food_candidates(table_id: str, db: DBSession = Depends(get_db)):
    return [FoodCandidateOut.model_validate(c) for c in TableService.rank_food_candidates(db, table_id)]


@router.put("/{table_id}/food", response_model=TableOut, dependencies=[Depends(require_roles(*EDITORS))])
def set_food(table_id: str, payload: FoodIn, db: DBSession = Depends(get_db)):
    return TableOut.model_validate(TableService.set_food(db, table_id, payload.player_id))


# -------- Players --------

@router.post(
    "/{table_id}/players",
    response_model=PlayerOut,
    status_code=201,
    dependencies=[Depends(require_roles(*EDITORS))],
)
def add_player(table_id: str, payload: PlayerCreateIn, db: DBSession = Depends(get_db)):
    p = TableService.add_player(
        db,
        table_id,
        name=payload.name,
        initial_chips=payload.chips,
        nickname=payload.nickname,
        show_me=payload.show_me,
    )
    return PlayerOut.model_validate(p)


@router.delete(
    "/{table_id}/players/{player_id}",
    response_model=MessageOut,
    dependencies=[Depends(require_roles(*EDITORS))],
)
def remove_player(table_id: str, player_id: str, db: DBSession = Depends(get_db)):
    TableService.remove_player(db, table_id, player_id)
    return MessageOut(message="Player removed")


@router.put(
    "/{table_id}/players/{player_id}/chips",
    response_model=PlayerOut,
    dependencies=[Depends(require_roles(*EDITORS))],
)
def update_chips(table_id: str, player_id: str, payload: ChipsIn, db: DBSession = Depends(get_db)):
    return PlayerOut.model_validate(TableService.update_chips(db, table_id, player_id, payload.chips))


@router.post(
    "/{table_id}/players/{player_id}/buyins",
    response_model=PlayerOut,
    dependencies=[Depends(require_roles(*EDITORS))],
)
def add_buy_in(table_id: str, player_id: str, payload: BuyInIn, db: DBSession = Depends(get_db)):
    return PlayerOut.model_validate(TableService.add_buy_in(db, table_id, player_id, payload.amount))


@router.post(
    "/{table_id}/players/{player_id}/cashouts",
    response_model=PlayerOut,
    dependencies=[Depends(require_roles(*EDITORS))],
)
def cash_out(table_id: str, player_id: str, payload: CashOutIn, db: DBSession = Depends(get_db)):
    return PlayerOut.model_validate(TableService.cash_out(db, table_id, player_id, payload.amount))


@router.put(
    "/{table_id}/players/{player_id}/reactivate",
    response_model=PlayerOut,
    dependencies=[Depends(require_roles(*EDITORS))],
)
def reactivate_player(table_id: str, player_id: str, db: DBSession = Depends(get_db)):
    return PlayerOut.model_validate(TableService.reactivate_player(db, table_id, player_id))


@router.put(
    "/{table_id}/players/{player_id}/showme",
    response_model=PlayerOut,
    dependencies=[Depends(require_roles(*EDITORS))],
)
def set_show_me(table_id: str, player_id: str, payload: ShowMeIn, db: DBSession = Depends(get_db)):
    return PlayerOut.model_validate(TableService.set_show_me(db, table_id, player_id, payload.show_me))


@router.get(
    "/{table_id}/players/{player_id}/balance",
    response_model=PlayerBalanceOut,
    dependencies=[Depends(get_current_user)],
)
def get_player_balance(table_id: str, player_id: str, db: DBSession = Depends(get_db)):
    return PlayerBalanceOut(player_id=player_id, balance=TableService.get_player_balance(db, table_id, player_id))
