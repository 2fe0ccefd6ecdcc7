"""Request/response models for the HTTP surface."""
from pydantic import BaseModel, Field

from photocritic.constants import HEALTH_STATUS


class AnalyzeRequest(BaseModel):
    image: str | None = None


class AnalyzeResponse(BaseModel):
    score: int
    composition: str
    lighting: str
    subject: str
    strengths: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)


class HealthResponse(BaseModel):
    status: str = HEALTH_STATUS


class ErrorResponse(BaseModel):
    error: str
