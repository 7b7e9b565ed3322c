from app.schemas.asaas import FinancialBucket, FinancialReport, FinancialSummary, PaymentRecord
from app.schemas.client import ClientCreate, ClientRead, ClientUpdate
from app.schemas.common import DataResponse, MessageResponse
from app.schemas.lead import LeadCreate, LeadRead, LeadStatusUpdate, LeadUpdate
from app.schemas.transaction import TransactionCreate, TransactionRead, TransactionSummary, TransactionUpdate

__all__ = [
    "ClientCreate",
    "ClientRead",
    "ClientUpdate",
    "DataResponse",
    "FinancialBucket",
    "FinancialReport",
    "FinancialSummary",
    "LeadCreate",
    "LeadRead",
    "LeadStatusUpdate",
    "LeadUpdate",
    "MessageResponse",
    "PaymentRecord",
    "TransactionCreate",
    "TransactionRead",
    "TransactionSummary",
    "TransactionUpdate",
]
