from app.models.client import Client
from app.models.lead import Lead
from app.models.transaction import Transaction

__all__ = ["Client", "Lead", "Transaction"]
