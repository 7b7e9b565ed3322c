"""Query filter builders for provider lookups and local transaction queries."""

import logging
from datetime import date
from typing import Any

from sqlalchemy import ColumnElement

from app.models.transaction import Transaction, TransactionType
from app.schemas.asaas import PaymentStatus

logger = logging.getLogger(__name__)

DEFAULT_OFFSET = 0
DEFAULT_LIMIT = 100

RANGE_KEYS = (
    ("paymentDate[ge]", "paymentDate[le]"),
    ("dueDate[ge]", "dueDate[le]"),
)


def strip_empty(filters: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in filters.items() if value is not None and value != ""}


def _parse_date(value: Any) -> date | None:
    if isinstance(value, date):
        return value
    if value is None or value == "":
        return None
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        return None


def _warn_inverted_ranges(filters: dict[str, Any]) -> None:
    for lower_key, upper_key in RANGE_KEYS:
        if lower_key not in filters or upper_key not in filters:
            continue
        lower = _parse_date(filters[lower_key])
        upper = _parse_date(filters[upper_key])
        if lower and upper and lower > upper:
            logger.warning(
                "Inverted date range forwarded to provider: %s=%s > %s=%s",
                lower_key,
                filters[lower_key],
                upper_key,
                filters[upper_key],
            )


def _finalize(filters: dict[str, Any]) -> dict[str, Any]:
    cleaned = strip_empty(filters)
    _warn_inverted_ranges(cleaned)
    return cleaned


def build_payments_filter(
    *,
    customer: str | None = None,
    subscription: str | None = None,
    installment: str | None = None,
    status: str | None = None,
    billing_type: str | None = None,
    payment_date: str | None = None,
    payment_date_from: str | None = None,
    payment_date_to: str | None = None,
    due_date_from: str | None = None,
    due_date_to: str | None = None,
    offset: int | str | None = DEFAULT_OFFSET,
    limit: int | str | None = DEFAULT_LIMIT,
) -> dict[str, Any]:
    return _finalize(
        {
            "customer": customer,
            "subscription": subscription,
            "installment": installment,
            "status": status,
            "billingType": billing_type,
            "paymentDate": payment_date,
            "paymentDate[ge]": payment_date_from,
            "paymentDate[le]": payment_date_to,
            "dueDate[ge]": due_date_from,
            "dueDate[le]": due_date_to,
            "offset": offset,
            "limit": limit,
        }
    )


def build_financial_filter(
    *,
    start_date: str | None = None,
    end_date: str | None = None,
    due_date_from: str | None = None,
    due_date_to: str | None = None,
) -> dict[str, Any]:
    return _finalize(
        {
            "paymentDate[ge]": start_date,
            "paymentDate[le]": end_date,
            "dueDate[ge]": due_date_from,
            "dueDate[le]": due_date_to,
        }
    )


def build_entries_filter(
    *,
    start_date: str | None = None,
    end_date: str | None = None,
    offset: int | str | None = DEFAULT_OFFSET,
    limit: int | str | None = DEFAULT_LIMIT,
) -> dict[str, Any]:
    return _finalize(
        {
            "status": PaymentStatus.RECEIVED.value,
            "paymentDate[ge]": start_date,
            "paymentDate[le]": end_date,
            "offset": offset,
            "limit": limit,
        }
    )


def build_outflows_filter(
    *,
    status: str | None = PaymentStatus.PENDING.value,
    start_date: str | None = None,
    end_date: str | None = None,
    offset: int | str | None = DEFAULT_OFFSET,
    limit: int | str | None = DEFAULT_LIMIT,
) -> dict[str, Any]:
    return _finalize(
        {
            "status": status,
            "dueDate[ge]": start_date,
            "dueDate[le]": end_date,
            "offset": offset,
            "limit": limit,
        }
    )


def build_transaction_filter(
    type_: str | None = None,
    start_date: date | str | None = None,
    end_date: date | str | None = None,
) -> list[ColumnElement[bool]]:
    """Return WHERE conditions for transaction list and summary queries.

    Unknown ``type_`` values are ignored. Blank or unparseable dates count as
    absent. Both date bounds are inclusive.
    """
    conditions: list[ColumnElement[bool]] = []
    start_date = _parse_date(start_date)
    end_date = _parse_date(end_date)

    if type_ in {item.value for item in TransactionType}:
        conditions.append(Transaction.type == type_)

    if start_date and end_date:
        conditions.append(Transaction.date.between(start_date, end_date))
    elif start_date:
        conditions.append(Transaction.date >= start_date)
    elif end_date:
        conditions.append(Transaction.date <= end_date)

    return conditions
