"""Response payloads for the lookup API."""

from typing import List

from pydantic import BaseModel, Field


class DomainListResponse(BaseModel):
    domains: List[str] = Field(default_factory=list)


class CodeResponse(BaseModel):
    """Most recent code for an address; empty when none is on file."""
    code: str


class ErrorResponse(BaseModel):
    error: str
