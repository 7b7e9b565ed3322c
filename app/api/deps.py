from functools import lru_cache

from app.core.config import get_settings
from app.db.session import get_db_session
from app.services.asaas_client import AsaasClient, AsaasConfig
from app.services.asaas_service import AsaasService


@lru_cache
def get_asaas_config() -> AsaasConfig:
    return AsaasConfig.from_settings(get_settings())


def get_asaas_service() -> AsaasService:
    return AsaasService(AsaasClient(get_asaas_config()))


__all__ = ["get_asaas_config", "get_asaas_service", "get_db_session"]
