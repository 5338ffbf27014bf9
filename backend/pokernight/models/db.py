from __future__ import annotations

import datetime as dt
import uuid

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def _uuid() -> str:
    return str(uuid.uuid4())


def _now() -> dt.datetime:
    return dt.datetime.utcnow()


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_uuid)
    username = Column(String(120), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(16), nullable=False, default="viewer")  # admin | editor | viewer
    created_at = Column(DateTime, nullable=False, default=_now)


class Group(Base):
    __tablename__ = "groups"

    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(String(120), unique=True, nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=_now)
    created_by = Column(String(36), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    tables = relationship("Table", back_populates="group")


class Table(Base):
    __tablename__ = "poker_tables"

    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(String(255), nullable=False)
    small_blind = Column(Integer, nullable=False)
    big_blind = Column(Integer, nullable=False)
    location = Column(String(255), nullable=True)
    created_at = Column(DateTime, nullable=False, default=_now, index=True)
    is_active = Column(Boolean, nullable=False, default=True)
    # Player id of whoever orders food; resolved against this table's players only
    food = Column(String(36), nullable=True)
    group_id = Column(String(36), ForeignKey("groups.id"), nullable=False, index=True)
    creator_id = Column(String(36), nullable=True)

    group = relationship("Group", back_populates="tables")
    players = relationship(
        "Player",
        back_populates="table",
        cascade="all, delete-orphan",
        order_by="Player.name",
    )


class Player(Base):
    __tablename__ = "players"

    id = Column(String(36), primary_key=True, default=_uuid)
    table_id = Column(String(36), ForeignKey("poker_tables.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    nickname = Column(String(255), nullable=True)
    chips = Column(Integer, nullable=False, default=0)
    total_buy_in = Column(Integer, nullable=False, default=0)
    active = Column(Boolean, nullable=False, default=True)
    show_me = Column(Boolean, nullable=False, default=True)

    table = relationship("Table", back_populates="players")
    buy_ins = relationship(
        "BuyIn",
        back_populates="player",
        cascade="all, delete-orphan",
        order_by="BuyIn.timestamp",
    )
    cash_outs = relationship(
        "CashOut",
        back_populates="player",
        cascade="all, delete-orphan",
        order_by="CashOut.timestamp",
    )


class BuyIn(Base):
    __tablename__ = "buyins"

    id = Column(String(36), primary_key=True, default=_uuid)
    player_id = Column(String(36), ForeignKey("players.id"), nullable=False, index=True)
    amount = Column(Integer, nullable=False)
    timestamp = Column(DateTime, nullable=False, default=_now)

    player = relationship("Player", back_populates="buy_ins")


class CashOut(Base):
    __tablename__ = "cashouts"

    id = Column(String(36), primary_key=True, default=_uuid)
    player_id = Column(String(36), ForeignKey("players.id"), nullable=False, index=True)
    amount = Column(Integer, nullable=False)
    timestamp = Column(DateTime, nullable=False, default=_now)

    player = relationship("Player", back_populates="cash_outs")

    __table_args__ = (
        UniqueConstraint("player_id", name="uq_cashouts_player_id"),
    )
