"""Pydantic response models (DTOs) for FastAPI endpoints."""

from pydantic import BaseModel, Field


class SearchResponseDTO(BaseModel):
    links: list[str] = Field(default_factory=list)
    summary: str

    @classmethod
    def from_pipeline_response(cls, pr):
        """Convert PipelineResponse to DTO."""
        return cls(links=list(pr.links), summary=pr.summary)


class HealthResponseDTO(BaseModel):
    status: str
    timestamp: str
    version: str = "1.0.0"
