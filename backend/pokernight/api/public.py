"""Read-only endpoints that do not require a login."""
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session as DBSession

from ..core.deps import get_db
from ..models.schemas import TableOut
from ..services.table_service import TableService

router = APIRouter(prefix="/api", tags=["public"])


@router.get("/public/tables", response_model=list[TableOut])
def list_public_tables(db: DBSession = Depends(get_db)):
    return [TableOut.model_validate(t) for t in TableService.list_tables(db)]


@router.get("/share/{table_id}", response_model=TableOut)
def get_shared_table(table_id: str, db: DBSession = Depends(get_db)):
    return TableOut.model_validate(TableService.get_table(db, table_id))


@router.get("/statistics/players", response_model=list[str])
def list_statistics_players(db: DBSession = Depends(get_db)):
    return TableService.list_statistics_player_names(db)
