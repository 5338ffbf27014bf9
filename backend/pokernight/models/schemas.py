from __future__ import annotations

import datetime as dt
from typing import Literal

from pydantic import BaseModel, Field


UserRole = Literal["admin", "editor", "viewer"]


class UserOut(BaseModel):
    id: str
    username: str
    role: UserRole

    class Config:
        from_attributes = True


class LoginIn(BaseModel):
    username: str
    password: str


class LoginOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut


class UserCreateIn(BaseModel):
    username: str = Field(min_length=1, max_length=120)
    password: str = Field(min_length=4, max_length=128)
    role: UserRole = "viewer"


class UserRoleIn(BaseModel):
    role: UserRole


class UserPasswordIn(BaseModel):
    password: str = Field(min_length=4, max_length=128)


class GroupOut(BaseModel):
    id: str
    name: str
    description: str | None = None
    created_at: dt.datetime
    created_by: str | None = None
    is_active: bool

    class Config:
        from_attributes = True


class GroupCreateIn(BaseModel):
    name: str = Field(min_length=1, max_length=120)
    description: str | None = None


class GroupUpdateIn(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=120)
    description: str | None = None
    is_active: bool | None = None


class BuyInOut(BaseModel):
    id: str
    amount: int
    timestamp: dt.datetime

    class Config:
        from_attributes = True


class CashOutOut(BaseModel):
    id: str
    amount: int
    timestamp: dt.datetime

    class Config:
        from_attributes = True


class PlayerOut(BaseModel):
    id: str
    name: str
    nickname: str | None = None
    chips: int
    total_buy_in: int
    active: bool
    show_me: bool = True
    buy_ins: list[BuyInOut] = []
    cash_outs: list[CashOutOut] = []

    class Config:
        from_attributes = True


class PlayerCreateIn(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    nickname: str | None = Field(default=None, max_length=255)
    chips: int = 0  # initial buy-in
    show_me: bool = True


class BuyInIn(BaseModel):
    amount: int


class CashOutIn(BaseModel):
    amount: int


class ShowMeIn(BaseModel):
    show_me: bool


class ChipsIn(BaseModel):
    chips: int


class PlayerBalanceOut(BaseModel):
    player_id: str
    balance: int


class TableOut(BaseModel):
    """Full table snapshot. Serializes and reloads without losing ledger detail."""
    id: str
    name: str
    small_blind: int
    big_blind: int
    location: str | None = None
    created_at: dt.datetime
    is_active: bool
    food: str | None = None
    group_id: str
    players: list[PlayerOut] = []

    class Config:
        from_attributes = True


class TableCreateIn(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    small_blind: int
    big_blind: int
    location: str | None = None
    group_id: str
    created_at: dt.datetime | None = None


class TableUpdateIn(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    small_blind: int | None = None
    big_blind: int | None = None
    location: str | None = None
    created_at: dt.datetime | None = None
    food: str | None = None
    group_id: str | None = None


class FoodIn(BaseModel):
    player_id: str | None = None


class TableBalanceOut(BaseModel):
    total_buy_ins: int
    accounted_for: int
    difference: int
    status: Literal["balanced", "missing", "excess"]


class DeactivationCheckOut(BaseModel):
    all_players_inactive: bool
    is_balance_matching: bool
    balance: TableBalanceOut
    active_players: list[str] = []
    can_deactivate: bool
    failed_guards: list[str] = []


class FoodCandidateOut(BaseModel):
    player_id: str
    name: str
    participations: int
    food_orders: int
    food_order_percent: float
    last_order_time: dt.datetime | None = None
    is_eligible: bool
    is_top_candidate: bool

    class Config:
        from_attributes = True


class MessageOut(BaseModel):
    message: str
