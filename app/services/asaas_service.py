from __future__ import annotations

import asyncio
import logging
from typing import Any

from pydantic import ValidationError

from app.schemas.asaas import (
    FinancialBucket,
    FinancialEntries,
    FinancialReport,
    FinancialSummary,
    PaymentRecord,
    PaymentStatus,
)
from app.services.asaas_client import AsaasClient, ProviderFault, ProviderOk, ProviderResult

logger = logging.getLogger(__name__)

FINANCIAL_BUCKETS = (
    ("received", PaymentStatus.RECEIVED),
    ("pending", PaymentStatus.PENDING),
    ("overdue", PaymentStatus.OVERDUE),
)


def unwrap_records(result: ProviderResult) -> ProviderResult:
    """Reduce a list response to its record sequence.

    The provider usually answers ``{"object": "list", "data": [...]}`` but some
    endpoints return the bare list.
    """
    if isinstance(result, ProviderFault):
        return result

    body = result.body
    if isinstance(body, dict) and isinstance(body.get("data"), list):
        return ProviderOk(body=body["data"], status_code=result.status_code)
    if isinstance(body, list):
        return result
    return ProviderFault(message="Malformed payment list body", status_code=result.status_code)


class AsaasService:
    def __init__(self, client: AsaasClient) -> None:
        self.client = client

    @property
    def is_sandbox(self) -> bool:
        return self.client.config.is_sandbox

    async def fetch_payments(self, filters: dict[str, Any]) -> ProviderResult:
        """Fetch one provider page of payments; no pagination walking."""
        return unwrap_records(await self.client.get("/payments", params=filters))

    async def get_payments(self, filters: dict[str, Any]) -> list[dict[str, Any]]:
        result = await self.fetch_payments(filters)
        if isinstance(result, ProviderFault):
            logger.error(
                "Asaas get_payments failed: status=%s, filters=%s, error=%s",
                result.status_code,
                filters,
                result.message,
            )
            return []
        return result.body

    async def get_payment(self, payment_id: str) -> dict[str, Any] | None:
        result = await self.client.get(f"/payments/{payment_id}")
        if isinstance(result, ProviderFault):
            if not result.is_not_found:
                logger.error(
                    "Asaas get_payment failed: payment_id=%s, status=%s, error=%s",
                    payment_id,
                    result.status_code,
                    result.message,
                )
            return None
        return result.body

    async def get_balance(self) -> dict[str, Any] | None:
        result = await self.client.get("/myAccount")
        if isinstance(result, ProviderFault):
            logger.error("Asaas get_balance failed: status=%s, error=%s", result.status_code, result.message)
            return None
        return result.body

    async def confirm_payment(self, payment_id: str) -> dict[str, Any] | None:
        if not self.is_sandbox:
            logger.warning(
                "Payment confirmation refused outside sandbox: payment_id=%s, base_url=%s",
                payment_id,
                self.client.config.base_url,
            )
            return None

        result = await self.client.post(f"/sandbox/payment/{payment_id}/confirm")
        if isinstance(result, ProviderFault):
            logger.error(
                "Asaas confirm_payment failed: payment_id=%s, status=%s, error=%s",
                payment_id,
                result.status_code,
                result.message,
            )
            return None
        return result.body

    async def get_financial(self, filters: dict[str, Any]) -> FinancialReport:
        """Build the received/pending/overdue report.

        The three status queries share every other filter. If any of them
        fails the whole report falls back to zeros with an ``error`` note;
        partial buckets are never returned.
        """
        queries = [{**filters, "status": status.value} for _, status in FINANCIAL_BUCKETS]
        results = await asyncio.gather(*(self.fetch_payments(query) for query in queries))

        buckets: dict[str, FinancialBucket] = {}
        for (label, status), result in zip(FINANCIAL_BUCKETS, results):
            if isinstance(result, ProviderFault):
                return self._degraded(f"{status.value}: {result.message}", filters)
            try:
                records = [PaymentRecord.model_validate(item) for item in result.body]
            except ValidationError as exc:
                return self._degraded(f"{status.value}: invalid payment record ({exc.error_count()} errors)", filters)
            buckets[label] = FinancialBucket.from_records(records)

        entries = FinancialEntries(**buckets)
        return FinancialReport(entries=entries, summary=FinancialSummary.from_entries(entries))

    @staticmethod
    def _degraded(message: str, filters: dict[str, Any]) -> FinancialReport:
        logger.error("Asaas get_financial degraded: filters=%s, error=%s", filters, message)
        return FinancialReport.degraded(f"Erro ao consultar financeiro da Asaas ({message})")
