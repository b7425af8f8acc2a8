"""Domain entities.

Plain data classes independent of the database schema; stores convert them
to and from ORM rows (see ``finance_api.repositories.mappers``). Entities are
created through their ``create`` factories, which enforce the creation
invariants, and mutated only through their methods.
"""

from __future__ import annotations

import base64
import hashlib
import re
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum, IntEnum

from finance_api.core.datetime_utils import utc_now, utc_today
from finance_api.domain.errors import invariant_error, validation_error
from finance_api.domain.money import MAX_AMOUNT, Money

DEFAULT_COLOR = "#000000"
TITLE_MAX_LENGTH = 256
CATEGORY_NAME_MAX_LENGTH = 128
CATEGORY_DESCRIPTION_MAX_LENGTH = 512

_COLOR_RE = re.compile(r"^#[0-9a-fA-F]{6}$")


def new_id() -> uuid.UUID:
    return uuid.uuid4()


class TransactionType(IntEnum):
    INCOME = 1
    EXPENSE = 2


class TransactionKind(str, Enum):
    SIMPLE = "simple"
    RECURRENT = "recurrent"


class RecurrentPeriod(IntEnum):
    DAILY = 1
    WEEKLY = 2
    MONTHLY = 3
    YEARLY = 4


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"


def validate_color(color: str | None) -> str:
    if color is None or not color.strip():
        return DEFAULT_COLOR

    color = color.strip()
    if not _COLOR_RE.match(color):
        raise validation_error(
            "InvalidColor",
            "Color must be a valid hex color code (e.g., #RRGGBB).",
            "color",
        )
    return color


def _clean_name(name: str | None) -> str:
    if name is None or not name.strip():
        raise validation_error("InvalidName", "Category name cannot be empty.", "name")
    name = name.strip()
    if len(name) > CATEGORY_NAME_MAX_LENGTH:
        raise validation_error(
            "InvalidName",
            f"Category name cannot exceed {CATEGORY_NAME_MAX_LENGTH} characters.",
            "name",
        )
    return name


def _clean_description(description: str | None) -> str | None:
    if description is None:
        return None
    description = description.strip()
    if len(description) > CATEGORY_DESCRIPTION_MAX_LENGTH:
        raise validation_error(
            "InvalidDescription",
            f"Description cannot exceed {CATEGORY_DESCRIPTION_MAX_LENGTH} characters.",
            "description",
        )
    return description or None


@dataclass
class Category:
    id: uuid.UUID
    name: str
    description: str | None
    color: str
    parent_category_id: uuid.UUID | None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def create(
        cls,
        name: str,
        description: str | None = None,
        color: str | None = DEFAULT_COLOR,
        parent_category_id: uuid.UUID | None = None,
    ) -> Category:
        now = utc_now()
        return cls(
            id=new_id(),
            name=_clean_name(name),
            description=_clean_description(description),
            color=validate_color(color),
            parent_category_id=parent_category_id,
            is_active=True,
            created_at=now,
            updated_at=now,
        )

    def activate(self, active: bool) -> None:
        self.is_active = active
        self.updated_at = utc_now()

    def rename(self, name: str, description: str | None = None, color: str | None = None) -> None:
        self.name = _clean_name(name)
        self.description = _clean_description(description)
        if color is not None:
            self.color = validate_color(color)
        self.updated_at = utc_now()


@dataclass(frozen=True)
class Recurrence:
    period: RecurrentPeriod
    end_date: date


def _check_amount_limit(amount: Money) -> None:
    if amount.amount > MAX_AMOUNT:
        raise validation_error("InvalidAmount", f"Amount cannot exceed {MAX_AMOUNT}.", "amount")


def _check_create(title: str, amount: Money, day: date) -> str:
    if title is None or not title.strip():
        raise validation_error("InvalidTitle", "Title cannot be empty.", "title")
    title = title.strip()
    if len(title) > TITLE_MAX_LENGTH:
        raise validation_error(
            "InvalidTitle",
            f"Title cannot exceed {TITLE_MAX_LENGTH} characters.",
            "title",
        )
    if amount is None:
        raise validation_error("InvalidAmount", "Amount is required.", "amount")
    _check_amount_limit(amount)
    if day > utc_today():
        raise invariant_error("FutureDate", "Transaction date cannot be in the future.")
    return title


@dataclass
class Transaction:
    """A financial transaction.

    ``recurrence`` is ``None`` for a simple transaction; a recurrent one
    carries its period and end date.
    """

    id: uuid.UUID
    title: str
    amount: Money
    date: date
    type: TransactionType
    category_id: uuid.UUID
    created_at: datetime
    updated_at: datetime | None = None
    idempotency_hash: str | None = None
    recurrence: Recurrence | None = field(default=None)

    @property
    def is_recurrent(self) -> bool:
        return self.recurrence is not None

    @property
    def kind(self) -> TransactionKind:
        return TransactionKind.RECURRENT if self.is_recurrent else TransactionKind.SIMPLE

    @classmethod
    def create(
        cls,
        title: str,
        amount: Money,
        date: date,
        type: TransactionType,
        category_id: uuid.UUID,
    ) -> Transaction:
        return cls(
            id=new_id(),
            title=_check_create(title, amount, date),
            amount=amount,
            date=date,
            type=TransactionType(type),
            category_id=category_id,
            created_at=utc_now(),
        )

    @classmethod
    def create_recurrent(
        cls,
        title: str,
        amount: Money,
        date: date,
        end_date: date,
        type: TransactionType,
        category_id: uuid.UUID,
        period: RecurrentPeriod,
    ) -> Transaction:
        tx = cls.create(title, amount, date, type, category_id)
        tx.recurrence = Recurrence(period=RecurrentPeriod(period), end_date=end_date)
        return tx

    def update(self, amount: Money, category_id: uuid.UUID) -> None:
        if amount is None:
            raise validation_error("InvalidAmount", "Amount is required.", "amount")
        _check_amount_limit(amount)
        self.amount = amount
        self.category_id = category_id
        self.updated_at = utc_now()

    def generate_idempotency_hash(self) -> str:
        """Fingerprint of date, amount and title used to spot duplicate imports."""
        combined = f"{self.date:%Y-%m-%d}{self.amount.amount}{self.title}"
        digest = hashlib.sha256(combined.encode("utf-8")).digest()
        return base64.b64encode(digest).decode("ascii")


@dataclass
class User:
    id: uuid.UUID
    email: str
    password_hash: str
    nickname: str
    role: UserRole
    is_active: bool
    created_at: datetime
    last_login_at: datetime | None = None

    @classmethod
    def create(cls, email: str, password_hash: str, nickname: str) -> User:
        if email is None or not email.strip():
            raise validation_error("InvalidEmail", "Email is required.", "email")
        if password_hash is None or not password_hash.strip():
            raise validation_error("InvalidPassword", "Password is required.", "password")
        if nickname is None or not nickname.strip():
            raise validation_error("InvalidName", "Full name is required.", "fullName")

        return cls(
            id=new_id(),
            email=normalize_email(email),
            password_hash=password_hash,
            nickname=nickname.strip(),
            role=UserRole.USER,
            is_active=True,
            created_at=utc_now(),
        )

    def update_last_login(self) -> None:
        self.last_login_at = utc_now()


def normalize_email(email: str) -> str:
    return email.strip().lower()
