from datetime import datetime
from typing import Any

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

from app.models.client import ClientOrigin
from app.models.lead import LeadStatus
from app.schemas.aliases import PERSON_ALIASES, apply_referral_rule, normalize_keys
from app.schemas.common import RecordRead


class LeadCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    responsible_name: str = Field(min_length=1, max_length=255)
    email: EmailStr | None = None
    phone: str = Field(min_length=1, max_length=50)
    origin: ClientOrigin
    referred_by: str | None = Field(default=None, max_length=255)
    status: LeadStatus | None = None
    notes: str | None = Field(default=None, max_length=2000)

    @model_validator(mode="before")
    @classmethod
    def _normalize_payload(cls, data: Any) -> Any:
        return apply_referral_rule(normalize_keys(data, PERSON_ALIASES))


class LeadUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    responsible_name: str | None = Field(default=None, min_length=1, max_length=255)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, min_length=1, max_length=50)
    origin: ClientOrigin | None = None
    referred_by: str | None = Field(default=None, max_length=255)
    status: LeadStatus | None = None
    notes: str | None = Field(default=None, max_length=2000)

    @model_validator(mode="before")
    @classmethod
    def _normalize_payload(cls, data: Any) -> Any:
        return apply_referral_rule(normalize_keys(data, PERSON_ALIASES))

    @field_validator("name", "responsible_name", "phone", "origin", "status")
    @classmethod
    def _reject_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("O campo não pode ser nulo.")
        return value


class LeadStatusUpdate(BaseModel):
    status: LeadStatus


class LeadRead(RecordRead):
    name: str
    responsible_name: str
    email: str | None = None
    phone: str
    status: str
    origin: str
    referred_by: str | None = None
    notes: str | None = None
    created_at: datetime
    updated_at: datetime
