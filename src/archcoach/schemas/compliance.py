"""Pydantic models for the (mocked) compliance checklist."""

from typing import Literal

from pydantic import BaseModel, Field

ComplianceStatus = Literal["compliant", "partial", "non-compliant", "unknown"]


class ComplianceCheck(BaseModel):
    """One governance requirement and how well it is currently met."""

    id: str
    category: str
    requirement: str
    status: ComplianceStatus = "unknown"
    score: int = Field(default=0, ge=0, le=100)
    description: str = ""
    recommendation: str = ""
