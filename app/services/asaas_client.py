"""HTTP transport for the Asaas payments API.

Every call returns a ``ProviderOk`` or a ``ProviderFault`` instead of raising,
so callers have to decide what an unavailable provider means for them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

import httpx

from app.core.config import Settings

PRODUCTION_BASE_URL = "https://api.asaas.com/v3"
SANDBOX_BASE_URL = "https://api-sandbox.asaas.com/v3"


@dataclass(frozen=True)
class AsaasConfig:
    api_key: str
    base_url: str = PRODUCTION_BASE_URL
    timeout: float = 30.0

    @property
    def is_sandbox(self) -> bool:
        return "sandbox" in self.base_url

    @classmethod
    def from_settings(cls, settings: Settings) -> AsaasConfig:
        return cls(
            api_key=settings.asaas_api_key,
            base_url=settings.asaas_base_url.rstrip("/"),
            timeout=settings.asaas_timeout,
        )


@dataclass(frozen=True)
class ProviderOk:
    body: Any
    status_code: int = 200


@dataclass(frozen=True)
class ProviderFault:
    message: str
    status_code: int | None = None

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


ProviderResult = Union[ProviderOk, ProviderFault]


class AsaasClient:
    def __init__(self, config: AsaasConfig, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.config = config
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        return {
            "access_token": self.config.api_key,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    async def get(self, path: str, params: dict[str, Any] | None = None) -> ProviderResult:
        return await self._request("GET", path, params=params)

    async def post(self, path: str) -> ProviderResult:
        return await self._request("POST", path)

    async def _request(self, method: str, path: str, params: dict[str, Any] | None = None) -> ProviderResult:
        try:
            async with httpx.AsyncClient(
                base_url=self.config.base_url,
                timeout=self.config.timeout,
                transport=self._transport,
            ) as client:
                resp = await client.request(method, path, params=params, headers=self._headers())
        except httpx.HTTPError as exc:
            return ProviderFault(message=f"{type(exc).__name__}: {exc}")
        return self._handle_response(resp)

    @staticmethod
    def _handle_response(resp: httpx.Response) -> ProviderResult:
        if not resp.is_success:
            return ProviderFault(
                message=f"HTTP {resp.status_code}: {resp.text[:200] if resp.text else '(empty)'}",
                status_code=resp.status_code,
            )
        try:
            return ProviderOk(body=resp.json(), status_code=resp.status_code)
        except ValueError:
            return ProviderFault(
                message=f"Non-JSON response: {resp.text[:200] if resp.text else '(empty)'}",
                status_code=resp.status_code,
            )
