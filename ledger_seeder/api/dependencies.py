"""Dependency injection for FastAPI endpoints"""

from typing import Callable

from fastapi import Request

from ledger_seeder.infrastructure.clients.ledger import LedgerClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_client_factory() -> Callable[[str], LedgerClient]:
    """Provide a constructor turning an API key into a ledger client"""
    return LedgerClient
