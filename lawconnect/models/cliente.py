"""Subsets of a ``clientes`` row used by the email flow."""

from typing import Optional

from pydantic import BaseModel


class ClientContact(BaseModel):
    nombre: str = ""
    email: Optional[str] = None


class ClientSummary(BaseModel):
    """Client name embedded in reminder history rows."""

    nombre: Optional[str] = None


__all__ = ["ClientContact", "ClientSummary"]
