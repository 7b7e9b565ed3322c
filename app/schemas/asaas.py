import enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel


class PaymentStatus(str, enum.Enum):
    RECEIVED = "RECEIVED"
    PENDING = "PENDING"
    OVERDUE = "OVERDUE"
    REFUNDED = "REFUNDED"


class PaymentRecord(BaseModel):
    """A payment as returned by the provider.

    Only the fields used for bucketing are typed; anything else the provider
    sends is kept untouched. Status and billing type stay plain strings since
    the provider has more values than the ones this app reacts to.
    """

    id: str | None = None
    customer: str | None = None
    billing_type: str | None = None
    value: float | None = None
    net_value: float | None = None
    status: str | None = None
    due_date: str | None = None
    payment_date: str | None = None
    description: str | None = None
    invoice_url: str | None = None
    bank_slip_url: str | None = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


class FinancialBucket(BaseModel):
    data: list[PaymentRecord] = Field(default_factory=list)
    total: float = 0.0
    count: int = 0

    @field_serializer("data")
    def _serialize_records(self, records: list[PaymentRecord]) -> list[dict[str, Any]]:
        # records go back out exactly as the provider sent them
        return [record.model_dump(mode="json", by_alias=True, exclude_unset=True) for record in records]

    @classmethod
    def from_records(cls, records: list[PaymentRecord]) -> "FinancialBucket":
        return cls(
            data=records,
            total=sum((record.value or 0.0) for record in records),
            count=len(records),
        )


class FinancialEntries(BaseModel):
    received: FinancialBucket = Field(default_factory=FinancialBucket)
    pending: FinancialBucket = Field(default_factory=FinancialBucket)
    overdue: FinancialBucket = Field(default_factory=FinancialBucket)


class FinancialSummary(BaseModel):
    total_received: float = 0.0
    total_pending: float = 0.0
    total_overdue: float = 0.0
    total_expected: float = 0.0

    @classmethod
    def from_entries(cls, entries: FinancialEntries) -> "FinancialSummary":
        return cls(
            total_received=entries.received.total,
            total_pending=entries.pending.total,
            total_overdue=entries.overdue.total,
            total_expected=entries.pending.total + entries.overdue.total,
        )


class FinancialReport(BaseModel):
    entries: FinancialEntries = Field(default_factory=FinancialEntries)
    summary: FinancialSummary = Field(default_factory=FinancialSummary)
    error: str | None = None

    @classmethod
    def degraded(cls, error: str) -> "FinancialReport":
        return cls(error=error)

    def to_payload(self) -> dict[str, Any]:
        payload = self.model_dump(mode="json", by_alias=True)
        if self.error is None:
            payload.pop("error")
        return payload
