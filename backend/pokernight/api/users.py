from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session as DBSession

from ..core.deps import ADMIN_ONLY, get_db, require_roles
from ..models.db import User
from ..models.schemas import MessageOut, UserCreateIn, UserOut, UserPasswordIn, UserRoleIn
from ..services.user_service import UserService

router = APIRouter(
    prefix="/api/users",
    tags=["users"],
    dependencies=[Depends(require_roles(*ADMIN_ONLY))],
)


@router.get("", response_model=list[UserOut])
def list_users(db: DBSession = Depends(get_db)):
    return [UserOut.model_validate(u) for u in UserService.list_users(db)]


@router.post("", response_model=UserOut, status_code=201)
def register_user(payload: UserCreateIn, db: DBSession = Depends(get_db)):
    return UserOut.model_validate(UserService.register(db, payload.username, payload.password, payload.role))


@router.put("/{user_id}/role", response_model=UserOut)
def update_role(user_id: str, payload: UserRoleIn, db: DBSession = Depends(get_db)):
    return UserOut.model_validate(UserService.update_role(db, user_id, payload.role))


@router.put("/{user_id}/password", response_model=MessageOut)
def update_password(user_id: str, payload: UserPasswordIn, db: DBSession = Depends(get_db)):
    UserService.update_password(db, user_id, payload.password)
    return MessageOut(message="Password updated successfully")


@router.delete("/{user_id}", response_model=MessageOut)
def delete_user(
    user_id: str,
    db: DBSession = Depends(get_db),
    current_user: User = Depends(require_roles(*ADMIN_ONLY)),
):
    if str(current_user.id) == user_id:
        raise HTTPException(status_code=400, detail="Cannot delete your own account")
    UserService.delete_user(db, user_id)
    return MessageOut(message="User deleted successfully")
