from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db_session
from app.models.lead import Lead, LeadStatus
from app.schemas.common import DataResponse
from app.schemas.lead import LeadCreate, LeadRead, LeadStatusUpdate, LeadUpdate
from app.services.audit_log_service import log_event

router = APIRouter(prefix="/leads", tags=["leads"])


async def _get_or_404(session: AsyncSession, lead_id: int) -> Lead:
    lead = await session.get(Lead, lead_id)
    if lead is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Lead não encontrado")
    return lead


@router.post("", response_model=DataResponse[LeadRead], status_code=status.HTTP_201_CREATED)
async def create_lead(
    payload: LeadCreate,
    session: AsyncSession = Depends(get_db_session),
) -> dict:
    data = payload.model_dump(mode="json")
    data["status"] = data["status"] or LeadStatus.NOVO.value

    lead = Lead(**data)
    session.add(lead)
    await session.commit()
    await session.refresh(lead)
    log_event("create_lead", f"lead_id={lead.id}, status={lead.status}")
    return {"data": lead}


@router.get("", response_model=DataResponse[list[LeadRead]])
async def list_leads(session: AsyncSession = Depends(get_db_session)) -> dict:
    result = await session.scalars(
        select(Lead).order_by(Lead.updated_at.desc(), Lead.created_at.desc(), Lead.id.desc())
    )
    return {"data": list(result)}


@router.get("/{lead_id}", response_model=DataResponse[LeadRead])
async def get_lead(lead_id: int, session: AsyncSession = Depends(get_db_session)) -> dict:
    return {"data": await _get_or_404(session, lead_id)}


@router.put("/{lead_id}", response_model=DataResponse[LeadRead])
@router.patch("/{lead_id}", response_model=DataResponse[LeadRead])
async def update_lead(
    lead_id: int,
    payload: LeadUpdate,
    session: AsyncSession = Depends(get_db_session),
) -> dict:
    lead = await _get_or_404(session, lead_id)

    for field, value in payload.model_dump(mode="json", exclude_unset=True).items():
        setattr(lead, field, value)

    await session.commit()
    await session.refresh(lead)
    log_event("update_lead", f"lead_id={lead.id}")
    return {"data": lead}


@router.patch("/{lead_id}/status", response_model=DataResponse[LeadRead])
async def update_lead_status(
    lead_id: int,
    payload: LeadStatusUpdate,
    session: AsyncSession = Depends(get_db_session),
) -> dict:
    lead = await _get_or_404(session, lead_id)

    lead.status = payload.status.value
    await session.commit()
    await session.refresh(lead)
    log_event("update_lead_status", f"lead_id={lead.id}, status={lead.status}")
    return {"data": lead}


@router.delete("/{lead_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_lead(lead_id: int, session: AsyncSession = Depends(get_db_session)) -> Response:
    lead = await _get_or_404(session, lead_id)

    await session.delete(lead)
    await session.commit()
    log_event("delete_lead", f"lead_id={lead_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
