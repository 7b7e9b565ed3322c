from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db_session
from app.models.client import Client
from app.schemas.client import ClientCreate, ClientRead, ClientUpdate
from app.schemas.common import DataResponse
from app.services.audit_log_service import log_event

router = APIRouter(prefix="/clients", tags=["clients"])


async def _get_or_404(session: AsyncSession, client_id: int) -> Client:
    client = await session.get(Client, client_id)
    if client is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cliente não encontrado")
    return client


@router.post("", response_model=DataResponse[ClientRead], status_code=status.HTTP_201_CREATED)
async def create_client(
    payload: ClientCreate,
    session: AsyncSession = Depends(get_db_session),
) -> dict:
    client = Client(**payload.model_dump(mode="json", exclude={"monthly_fee"}), monthly_fee=payload.monthly_fee)
    session.add(client)
    await session.commit()
    await session.refresh(client)
    log_event("create_client", f"client_id={client.id}, origin={client.origin}")
    return {"data": client}


@router.get("", response_model=DataResponse[list[ClientRead]])
async def list_clients(session: AsyncSession = Depends(get_db_session)) -> dict:
    result = await session.scalars(select(Client).order_by(Client.created_at.desc(), Client.id.desc()))
    return {"data": list(result)}


@router.get("/{client_id}", response_model=DataResponse[ClientRead])
async def get_client(client_id: int, session: AsyncSession = Depends(get_db_session)) -> dict:
    return {"data": await _get_or_404(session, client_id)}


@router.put("/{client_id}", response_model=DataResponse[ClientRead])
@router.patch("/{client_id}", response_model=DataResponse[ClientRead])
async def update_client(
    client_id: int,
    payload: ClientUpdate,
    session: AsyncSession = Depends(get_db_session),
) -> dict:
    client = await _get_or_404(session, client_id)

    updates = payload.model_dump(exclude_unset=True)
    if "origin" in updates:
        updates["origin"] = payload.origin.value

    for field, value in updates.items():
        setattr(client, field, value)

    await session.commit()
    await session.refresh(client)
    log_event("update_client", f"client_id={client.id}")
    return {"data": client}


@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_client(client_id: int, session: AsyncSession = Depends(get_db_session)) -> Response:
    client = await _get_or_404(session, client_id)

    await session.delete(client)
    await session.commit()
    log_event("delete_client", f"client_id={client_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
