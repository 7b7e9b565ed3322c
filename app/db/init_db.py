from app.core.config import get_settings
from app.db.base import Base
from app.db.session import engine
from app.models import Client, Lead, Transaction  # noqa: F401
from app.services.audit_log_service import log_event

settings = get_settings()

EXPECTED_COLUMNS = {
    "transactions": {"id", "description", "amount", "type", "category", "date", "created_at", "updated_at"},
    "clients": {
        "id",
        "name",
        "responsible_name",
        "email",
        "phone",
        "origin",
        "referred_by",
        "monthly_fee",
        "notes",
        "created_at",
        "updated_at",
    },
    "leads": {
        "id",
        "name",
        "responsible_name",
        "email",
        "phone",
        "status",
        "origin",
        "referred_by",
        "notes",
        "created_at",
        "updated_at",
    },
}


async def _sqlite_schema_mismatch() -> bool:
    async with engine.connect() as conn:
        for table, expected in EXPECTED_COLUMNS.items():
            result = await conn.exec_driver_sql(f"PRAGMA table_info({table})")
            columns = {row[1] for row in result.fetchall()}
            if columns and not expected.issubset(columns):
                return True
    return False


async def init_db() -> None:
    should_reset = settings.reset_db_on_startup
    is_sqlite = engine.url.get_backend_name() == "sqlite"
    if not should_reset and is_sqlite and settings.auto_reset_sqlite_on_schema_mismatch:
        should_reset = await _sqlite_schema_mismatch()

    async with engine.begin() as conn:
        if should_reset:
            await conn.run_sync(Base.metadata.drop_all)
            log_event("reset_database", f"url={engine.url.render_as_string(hide_password=True)}")
        await conn.run_sync(Base.metadata.create_all)
