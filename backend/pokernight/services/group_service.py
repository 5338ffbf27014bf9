from __future__ import annotations

import logging

from sqlalchemy.orm import Session as DBSession

from ..core.exceptions import ConflictError, ErrorMessages, ValidationError
from ..models.db import Group, Table
from .repositories import GroupRepo, commit

logger = logging.getLogger(__name__)


class GroupService:
    @staticmethod
    def list_groups(db: DBSession) -> list[Group]:
        return db.query(Group).order_by(Group.name.asc()).all()

    @staticmethod
    def _ensure_unique_name(db: DBSession, name: str, exclude_id: str | None = None) -> None:
        q = db.query(Group).filter(Group.name == name)
        if exclude_id is not None:
            q = q.filter(Group.id != exclude_id)
        if q.first():
            raise ValidationError(ErrorMessages.GROUP_NAME_EXISTS, details={"name": name})

    @staticmethod
    def create_group(db: DBSession, name: str, description: str | None, created_by: str | None) -> Group:
        name = (name or "").strip()
        if not name:
            raise ValidationError(ErrorMessages.NAME_REQUIRED)
        GroupService._ensure_unique_name(db, name)

        group = Group(name=name, description=description, created_by=created_by, is_active=True)
        db.add(group)
        commit(db)
        db.refresh(group)
        logger.info(f"Group created: {group.id} '{name}'")
        return group

    @staticmethod
    def update_group(
        db: DBSession,
        group_id: str,
        name: str | None = None,
        description: str | None = None,
        is_active: bool | None = None,
    ) -> Group:
        group = GroupRepo.require(db, group_id)
        if name is not None:
            name = name.strip()
            if not name:
                raise ValidationError(ErrorMessages.NAME_REQUIRED)
            GroupService._ensure_unique_name(db, name, exclude_id=group_id)
            group.name = name
        if description is not None:
            group.description = description
        if is_active is not None:
            group.is_active = is_active
        commit(db)
        db.refresh(group)
        return group

    @staticmethod
    def delete_group(db: DBSession, group_id: str) -> None:
        group = GroupRepo.require(db, group_id)
        table_count = db.query(Table).filter(Table.group_id == group_id).count()
        if table_count > 0:
            raise ConflictError(
                ErrorMessages.GROUP_HAS_TABLES,
                details={"group_id": group_id, "table_count": table_count},
            )
        db.delete(group)
        commit(db)
        logger.info(f"Group deleted: {group_id}")
