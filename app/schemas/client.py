from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

from app.models.client import ClientOrigin
from app.schemas.aliases import CLIENT_ALIASES, apply_referral_rule, normalize_keys
from app.schemas.common import RecordRead


class ClientCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    responsible_name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    phone: str = Field(min_length=1, max_length=50)
    origin: ClientOrigin
    referred_by: str | None = Field(default=None, max_length=255)
    monthly_fee: Decimal = Field(ge=0)
    notes: str | None = Field(default=None, max_length=2000)

    @model_validator(mode="before")
    @classmethod
    def _normalize_payload(cls, data: Any) -> Any:
        return apply_referral_rule(normalize_keys(data, CLIENT_ALIASES))


class ClientUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    responsible_name: str | None = Field(default=None, min_length=1, max_length=255)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, min_length=1, max_length=50)
    origin: ClientOrigin | None = None
    referred_by: str | None = Field(default=None, max_length=255)
    monthly_fee: Decimal | None = Field(default=None, ge=0)
    notes: str | None = Field(default=None, max_length=2000)

    @model_validator(mode="before")
    @classmethod
    def _normalize_payload(cls, data: Any) -> Any:
        return apply_referral_rule(normalize_keys(data, CLIENT_ALIASES))

    @field_validator("name", "responsible_name", "email", "phone", "origin", "monthly_fee")
    @classmethod
    def _reject_null(cls, value: Any) -> Any:
        # only runs for keys that were actually sent
        if value is None:
            raise ValueError("O campo não pode ser nulo.")
        return value


class ClientRead(RecordRead):
    name: str
    responsible_name: str | None = None
    email: str | None = None
    phone: str
    origin: str
    referred_by: str | None = None
    monthly_fee: float | None = None
    notes: str | None = None
    created_at: datetime
