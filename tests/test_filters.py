import logging
from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError
from sqlalchemy import select

from app.models.transaction import Transaction
from app.schemas.aliases import CLIENT_ALIASES, apply_referral_rule, normalize_keys
from app.schemas.client import ClientCreate, ClientUpdate
from app.services.filters import (
    build_entries_filter,
    build_financial_filter,
    build_outflows_filter,
    build_payments_filter,
    build_transaction_filter,
)


def test_payments_filter_drops_empty_values_and_keeps_defaults():
    filters = build_payments_filter(customer="cus_1", subscription="", status=None, due_date_to="2024-03-31")

    assert filters == {"customer": "cus_1", "dueDate[le]": "2024-03-31", "offset": 0, "limit": 100}


def test_payments_filter_maps_every_field():
    filters = build_payments_filter(
        customer="cus_1",
        subscription="sub_1",
        installment="ins_1",
        status="PENDING",
        billing_type="BOLETO",
        payment_date="2024-01-10",
        payment_date_from="2024-01-01",
        payment_date_to="2024-01-31",
        due_date_from="2024-02-01",
        due_date_to="2024-02-29",
        offset=20,
        limit=10,
    )

    assert filters == {
        "customer": "cus_1",
        "subscription": "sub_1",
        "installment": "ins_1",
        "status": "PENDING",
        "billingType": "BOLETO",
        "paymentDate": "2024-01-10",
        "paymentDate[ge]": "2024-01-01",
        "paymentDate[le]": "2024-01-31",
        "dueDate[ge]": "2024-02-01",
        "dueDate[le]": "2024-02-29",
        "offset": 20,
        "limit": 10,
    }


def test_inverted_range_is_logged_but_forwarded(caplog):
    with caplog.at_level(logging.WARNING, logger="app.services.filters"):
        filters = build_financial_filter(start_date="2024-02-01", end_date="2024-01-01")

    assert filters == {"paymentDate[ge]": "2024-02-01", "paymentDate[le]": "2024-01-01"}
    assert "Inverted date range" in caplog.text


def test_entries_and_outflows_filters():
    assert build_entries_filter(start_date="2024-01-01") == {
        "status": "RECEIVED",
        "paymentDate[ge]": "2024-01-01",
        "offset": 0,
        "limit": 100,
    }
    assert build_outflows_filter(end_date="2024-01-31", limit=5) == {
        "status": "PENDING",
        "dueDate[le]": "2024-01-31",
        "offset": 0,
        "limit": 5,
    }
    assert build_outflows_filter(status="OVERDUE")["status"] == "OVERDUE"


@pytest.mark.anyio
async def test_transaction_filter_bounds_are_inclusive(session_factory):
    async with session_factory() as session:
        for day, kind in (
            (date(2023, 12, 31), "income"),
            (date(2024, 1, 1), "income"),
            (date(2024, 1, 31), "income"),
            (date(2024, 1, 20), "expense"),
            (date(2024, 2, 1), "income"),
        ):
            session.add(Transaction(description=str(day), amount=Decimal("1.00"), type=kind, category="x", date=day))
        await session.commit()

    async def _dates(*conditions) -> set[date]:
        async with session_factory() as session:
            return set(await session.scalars(select(Transaction.date).where(*conditions)))

    assert await _dates(*build_transaction_filter("income", date(2024, 1, 1), date(2024, 1, 31))) == {
        date(2024, 1, 1),
        date(2024, 1, 31),
    }
    assert await _dates(*build_transaction_filter(None, date(2024, 1, 31), None)) == {
        date(2024, 1, 31),
        date(2024, 2, 1),
    }
    assert await _dates(*build_transaction_filter(None, None, date(2024, 1, 1))) == {
        date(2023, 12, 31),
        date(2024, 1, 1),
    }
    assert await _dates(*build_transaction_filter("bogus", date(2024, 1, 1), date(2024, 1, 31))) == {
        date(2024, 1, 1),
        date(2024, 1, 20),
        date(2024, 1, 31),
    }


def test_transaction_filter_ignores_unknown_and_miscased_types():
    assert build_transaction_filter("bogus") == []
    assert build_transaction_filter("Income") == []
    assert len(build_transaction_filter("expense")) == 1
    assert build_transaction_filter() == []


def test_transaction_filter_treats_blank_dates_as_absent():
    assert build_transaction_filter("", "", "") == []
    assert build_transaction_filter(None, "not-a-date", None) == []
    assert len(build_transaction_filter(None, "2024-01-01", "")) == 1


def test_camel_case_key_wins_and_is_discarded():
    normalized = normalize_keys({"responsibleName": "Ana", "responsible_name": "Ana Other"}, CLIENT_ALIASES)

    assert normalized == {"responsible_name": "Ana"}


def test_referral_rule_clears_referred_by():
    data = normalize_keys({"origin": "site", "referredBy": "Carlos"}, CLIENT_ALIASES)

    assert apply_referral_rule(data) == {"origin": "site", "referred_by": None}
    assert apply_referral_rule({"origin": "indicacao", "referred_by": "Carlos"})["referred_by"] == "Carlos"
    assert apply_referral_rule({"referred_by": "Carlos"}) == {"referred_by": "Carlos"}


def test_client_create_schema_resolves_aliases():
    payload = ClientCreate.model_validate(
        {
            "name": "Padaria",
            "responsibleName": "Ana",
            "responsible_name": "Ana Other",
            "email": "ana@padaria.com.br",
            "phone": "1199",
            "origin": "site",
            "referredBy": "Carlos",
            "monthly_fee": "10.50",
        }
    )

    assert payload.responsible_name == "Ana"
    assert payload.referred_by is None
    assert payload.monthly_fee == Decimal("10.50")


def test_client_create_schema_reports_missing_name():
    with pytest.raises(ValidationError) as exc_info:
        ClientCreate.model_validate(
            {
                "responsible_name": "Ana",
                "email": "ana@padaria.com.br",
                "phone": "1199",
                "origin": "site",
                "monthlyFee": 1,
            }
        )

    assert [error["loc"] for error in exc_info.value.errors()] == [("name",)]


def test_client_update_only_touches_sent_fields():
    update = ClientUpdate.model_validate({"origin": "evento"})

    assert update.model_dump(exclude_unset=True) == {"origin": "evento", "referred_by": None}
    assert ClientUpdate.model_validate({"notes": "x"}).model_dump(exclude_unset=True) == {"notes": "x"}
