"""Pydantic schemas for API request/response validation."""

from typing import Any

from pydantic import BaseModel, Field


class CommandRequest(BaseModel):
    args: dict[str, Any] = Field(default_factory=dict)


class CommandResponse(BaseModel):
    command: str
    result: Any = None
    state: dict[str, Any]


class CommandInfo(BaseModel):
    name: str
    description: str
    component: str
    mutating: bool
