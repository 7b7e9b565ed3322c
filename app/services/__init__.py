from app.services.asaas_client import AsaasClient, AsaasConfig, ProviderFault, ProviderOk
from app.services.asaas_service import AsaasService
from app.services.audit_log_service import log_event

__all__ = [
    "AsaasClient",
    "AsaasConfig",
    "AsaasService",
    "ProviderFault",
    "ProviderOk",
    "log_event",
]
