from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session as DBSession

from ..core.deps import ADMIN_ONLY, get_db, require_roles
from ..models.db import User
from ..models.schemas import GroupCreateIn, GroupOut, GroupUpdateIn, MessageOut
from ..services.group_service import GroupService

router = APIRouter(prefix="/api/groups", tags=["groups"])


@router.get("", response_model=list[GroupOut])
def list_groups(db: DBSession = Depends(get_db)):
    return [GroupOut.model_validate(g) for g in GroupService.list_groups(db)]


@router.post("", response_model=GroupOut, status_code=201)
def create_group(
    payload: GroupCreateIn,
    db: DBSession = Depends(get_db),
    user: User = Depends(require_roles(*ADMIN_ONLY)),
):
    g = GroupService.create_group(db, payload.name, payload.description, created_by=str(user.id))
    return GroupOut.model_validate(g)


@router.put("/{group_id}", response_model=GroupOut, dependencies=[Depends(require_roles(*ADMIN_ONLY))])
def update_group(group_id: str, payload: GroupUpdateIn, db: DBSession = Depends(get_db)):
    g = GroupService.update_group(
        db,
        group_id,
        name=payload.name,
        description=payload.description,
        is_active=payload.is_active,
    )
    return GroupOut.model_validate(g)


@router.delete("/{group_id}", response_model=MessageOut, dependencies=[Depends(require_roles(*ADMIN_ONLY))])
def delete_group(group_id: str, db: DBSession = Depends(get_db)):
    GroupService.delete_group(db, group_id)
    return MessageOut(message="Group deleted successfully")
