"""
Back Office Ledger - Clients Router

Client CRUD and the account adjustment endpoint.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_session
from app.dependencies import get_current_admin
from app.schemas.client import (
    AdjustAccountRequest,
    ClientCreateRequest,
    ClientResponse,
    ClientUpdateRequest,
)
from app.schemas.common import MessageResponse, success_response
from app.services.client_service import ClientService


router = APIRouter(dependencies=[Depends(get_current_admin)])


@router.get("", summary="List clients")
async def list_clients(db: AsyncSession = Depends(get_async_session)):
    service = ClientService(db)
    clients = await service.get_clients()
    return success_response([ClientResponse.model_validate(c) for c in clients])


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create client")
async def create_client(
    request: ClientCreateRequest,
    db: AsyncSession = Depends(get_async_session),
):
    service = ClientService(db)
    client = await service.create_client(request)
    return success_response(ClientResponse.model_validate(client))


@router.get("/{client_id}", summary="Get client")
async def get_client(client_id: int, db: AsyncSession = Depends(get_async_session)):
    service = ClientService(db)
    client = await service.get_client(client_id)
    return success_response(ClientResponse.model_validate(client))


@router.patch("/{client_id}", summary="Update client")
async def update_client(
    client_id: int,
    request: ClientUpdateRequest,
    db: AsyncSession = Depends(get_async_session),
):
    service = ClientService(db)
    client = await service.update_client(client_id, request)
    return success_response(ClientResponse.model_validate(client))


@router.delete("/{client_id}", summary="Delete client")
async def delete_client(client_id: int, db: AsyncSession = Depends(get_async_session)):
    service = ClientService(db)
    await service.delete_client(client_id)
    return success_response(MessageResponse(message="Client deleted successfully"))


@router.post(
    "/{client_id}/account/adjust",
    summary="Adjust client account",
    description="Apply deltas to the locked, advance and due balances in one atomic update. "
                "Due moves by locked delta minus advance delta.",
)
async def adjust_account(
    client_id: int,
    request: AdjustAccountRequest,
    db: AsyncSession = Depends(get_async_session),
):
    service = ClientService(db)
    client = await service.adjust_account(
        client_id,
        locked_delta=request.locked_delta,
        advance_delta=request.advance_delta,
    )
    return success_response(ClientResponse.model_validate(client))
