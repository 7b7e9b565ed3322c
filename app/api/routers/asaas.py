from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse

from app.api.deps import get_asaas_service
from app.schemas.asaas import PaymentStatus
from app.services.asaas_service import AsaasService
from app.services.filters import (
    DEFAULT_LIMIT,
    DEFAULT_OFFSET,
    build_entries_filter,
    build_financial_filter,
    build_outflows_filter,
    build_payments_filter,
)

router = APIRouter(prefix="/asaas", tags=["asaas"])


def _page(value: str | None, default: int) -> str | int:
    # an absent key takes the default, a blank one is dropped downstream
    return default if value is None else value


@router.get("/payments")
async def list_payments(
    customer: str | None = Query(default=None),
    subscription: str | None = Query(default=None),
    installment: str | None = Query(default=None),
    status_: str | None = Query(default=None, alias="status"),
    billing_type: str | None = Query(default=None),
    payment_date: str | None = Query(default=None),
    payment_date_from: str | None = Query(default=None),
    payment_date_to: str | None = Query(default=None),
    due_date_from: str | None = Query(default=None),
    due_date_to: str | None = Query(default=None),
    offset: str | None = Query(default=None),
    limit: str | None = Query(default=None),
    service: AsaasService = Depends(get_asaas_service),
) -> dict:
    filters = build_payments_filter(
        customer=customer,
        subscription=subscription,
        installment=installment,
        status=status_,
        billing_type=billing_type,
        payment_date=payment_date,
        payment_date_from=payment_date_from,
        payment_date_to=payment_date_to,
        due_date_from=due_date_from,
        due_date_to=due_date_to,
        offset=_page(offset, DEFAULT_OFFSET),
        limit=_page(limit, DEFAULT_LIMIT),
    )
    return {"data": await service.get_payments(filters)}


@router.get("/payments/{payment_id}")
async def get_payment(payment_id: str, service: AsaasService = Depends(get_asaas_service)) -> dict:
    payment = await service.get_payment(payment_id)
    if payment is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Pagamento não encontrado")
    return {"data": payment}


@router.post("/payments/{payment_id}/confirm")
async def confirm_payment(payment_id: str, service: AsaasService = Depends(get_asaas_service)) -> dict:
    if not service.is_sandbox:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Confirmação de pagamento disponível apenas no ambiente sandbox",
        )

    payment = await service.confirm_payment(payment_id)
    if payment is None:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Erro ao confirmar pagamento")
    return {"data": payment}


@router.get("/balance")
async def get_balance(service: AsaasService = Depends(get_asaas_service)) -> dict:
    balance = await service.get_balance()
    if balance is None:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Erro ao consultar saldo")
    return {"data": balance}


@router.get("/financial")
async def get_financial(
    start_date: str | None = Query(default=None),
    end_date: str | None = Query(default=None),
    due_date_from: str | None = Query(default=None),
    due_date_to: str | None = Query(default=None),
    service: AsaasService = Depends(get_asaas_service),
) -> JSONResponse:
    filters = build_financial_filter(
        start_date=start_date,
        end_date=end_date,
        due_date_from=due_date_from,
        due_date_to=due_date_to,
    )
    report = await service.get_financial(filters)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST if report.error else status.HTTP_200_OK,
        content={"data": report.to_payload()},
    )


@router.get("/entries")
async def list_entries(
    start_date: str | None = Query(default=None),
    end_date: str | None = Query(default=None),
    offset: str | None = Query(default=None),
    limit: str | None = Query(default=None),
    service: AsaasService = Depends(get_asaas_service),
) -> dict:
    filters = build_entries_filter(
        start_date=start_date,
        end_date=end_date,
        offset=_page(offset, DEFAULT_OFFSET),
        limit=_page(limit, DEFAULT_LIMIT),
    )
    return {"data": await service.get_payments(filters)}


@router.get("/outflows")
async def list_outflows(
    status_: str = Query(default=PaymentStatus.PENDING.value, alias="status"),
    start_date: str | None = Query(default=None),
    end_date: str | None = Query(default=None),
    offset: str | None = Query(default=None),
    limit: str | None = Query(default=None),
    service: AsaasService = Depends(get_asaas_service),
) -> dict:
    filters = build_outflows_filter(
        status=status_,
        start_date=start_date,
        end_date=end_date,
        offset=_page(offset, DEFAULT_OFFSET),
        limit=_page(limit, DEFAULT_LIMIT),
    )
    return {"data": await service.get_payments(filters)}
