"""
Back Office Ledger - Client Service

Business logic for client management and account balance adjustment.
All balance mutations keep due_amount_nrs == locked_amount_nrs - advance_amount_nrs.
"""

import logging
from typing import List

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.client import Client
from app.schemas.client import ClientCreateRequest, ClientUpdateRequest
from app.utils.error_handling import NotFoundException

logger = logging.getLogger(__name__)

# Columns an update may explicitly clear
CLEARABLE_FIELDS = {"phone", "address", "contact_person", "contract_pdf_path"}


class ClientService:
    """Service for client operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_clients(self) -> List[Client]:
        """Get all clients, newest first."""
        result = await self.db.execute(
            select(Client).order_by(Client.created_at.desc(), Client.id.desc())
        )
        return list(result.scalars().all())

    async def get_client(self, client_id: int) -> Client:
        """
        Get client by ID.

        Raises:
            NotFoundException: If the client does not exist
        """
        client = await self.db.get(Client, client_id)
        if not client:
            raise NotFoundException("Client", client_id)
        return client

    async def create_client(self, data: ClientCreateRequest) -> Client:
        """Create a client with due derived from locked and advance."""
        client = Client(**data.model_dump())
        client.due_amount_nrs = client.locked_amount_nrs - client.advance_amount_nrs

        self.db.add(client)
        await self.db.commit()
        await self.db.refresh(client)

        logger.info(f"Created client {client.id} ({client.name})")
        return client

    async def update_client(self, client_id: int, data: ClientUpdateRequest) -> Client:
        """Update a client, recomputing due when locked or advance change."""
        client = await self.get_client(client_id)

        changes = data.model_dump(exclude_unset=True)
        for field, value in changes.items():
            if value is None and field not in CLEARABLE_FIELDS:
                continue
            setattr(client, field, value)

        if "locked_amount_nrs" in changes or "advance_amount_nrs" in changes:
            client.due_amount_nrs = client.locked_amount_nrs - client.advance_amount_nrs

        await self.db.commit()
        await self.db.refresh(client)
        return client

    async def delete_client(self, client_id: int) -> None:
        """Delete a client. Fails with an integrity error while income references it."""
        client = await self.get_client(client_id)
        await self.db.delete(client)
        await self.db.commit()
        logger.info(f"Deleted client {client_id}")

    async def adjust_account(
        self,
        client_id: int,
        locked_delta: int = 0,
        advance_delta: int = 0,
    ) -> Client:
        """
        Apply signed deltas to a client's balances atomically.

        locked += locked_delta, advance += advance_delta and
        due += locked_delta - advance_delta are written by a single UPDATE
        in one transaction, so no reader observes a partial adjustment.
        Balances may go negative.

        Raises:
            NotFoundException: If the client does not exist
        """
        exists = await self.db.scalar(select(Client.id).where(Client.id == client_id))
        if exists is None:
            raise NotFoundException("Client", client_id)

        await self.db.execute(
            update(Client)
            .where(Client.id == client_id)
            .values(
                locked_amount_nrs=Client.locked_amount_nrs + locked_delta,
                advance_amount_nrs=Client.advance_amount_nrs + advance_delta,
                due_amount_nrs=Client.due_amount_nrs + (locked_delta - advance_delta),
            )
            .execution_options(synchronize_session=False)
        )
        await self.db.commit()

        client = await self.db.get(Client, client_id, populate_existing=True)
        logger.info(
            f"Adjusted account for client {client_id}: locked {locked_delta:+d}, advance {advance_delta:+d}"
        )
        return client
