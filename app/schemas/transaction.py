import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from app.models.transaction import TransactionType
from app.schemas.common import RecordRead


class TransactionCreate(BaseModel):
    description: str = Field(min_length=1, max_length=255)
    amount: Decimal = Field(ge=Decimal("0.01"))
    type: TransactionType
    category: str = Field(min_length=1, max_length=100)
    date: dt.date | None = None


class TransactionUpdate(BaseModel):
    description: str | None = Field(default=None, min_length=1, max_length=255)
    amount: Decimal | None = Field(default=None, ge=Decimal("0.01"))
    type: TransactionType | None = None
    category: str | None = Field(default=None, min_length=1, max_length=100)
    date: dt.date | None = None

    @field_validator("description", "amount", "type", "category", "date")
    @classmethod
    def _reject_null(cls, value):
        if value is None:
            raise ValueError("O campo não pode ser nulo.")
        return value


class TransactionRead(RecordRead):
    description: str
    amount: float
    type: str
    category: str
    date: dt.date
    created_at: dt.datetime


class TransactionSummary(BaseModel):
    income: float
    expense: float
    balance: float
