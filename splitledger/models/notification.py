"""Notifications published to external observers after each write."""

from datetime import datetime
from typing import Literal, Union
from pydantic import BaseModel, ConfigDict, Field

from splitledger.models.base import Amount, Identity, _utcnow


class Notification(BaseModel):
    model_config = ConfigDict(frozen=True)

    emitted_at: datetime = Field(default_factory=_utcnow)


class PersonRegistered(Notification):
    kind: Literal["person_registered"] = "person_registered"
    identity: Identity
    name: str


class NameUpdated(Notification):
    kind: Literal["name_updated"] = "name_updated"
    identity: Identity
    new_name: str


class ExpenseAdded(Notification):
    kind: Literal["expense_added"] = "expense_added"
    expense_id: int
    label: str


class DebtSettled(Notification):
    kind: Literal["debt_settled"] = "debt_settled"
    from_identity: Identity
    to_identity: Identity
    amount: Amount


AnyNotification = Union[PersonRegistered, NameUpdated, ExpenseAdded, DebtSettled]
