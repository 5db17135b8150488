"""
Back Office Ledger - Schemas Package

Pydantic schemas for request/response validation.
"""

from app.schemas.common import CamelModel, MessageResponse, success_response

__all__ = [
    "CamelModel",
    "MessageResponse",
    "success_response",
]
