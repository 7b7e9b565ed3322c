from fastapi import APIRouter

from app.api.routers.asaas import router as asaas_router
from app.api.routers.clients import router as clients_router
from app.api.routers.leads import router as leads_router
from app.api.routers.transactions import router as transactions_router

api_router = APIRouter()
api_router.include_router(transactions_router)
api_router.include_router(clients_router)
api_router.include_router(leads_router)
api_router.include_router(asaas_router)

__all__ = ["api_router"]
