"""Pipeline-level error taxonomy; each stage failure wraps the provider error."""

from orchestrator.pipeline_types import PipelineStage


class PipelineError(Exception):
    """A pipeline run ended in the Failed state."""

    status_code = 500
    public_message = "Pipeline failed"

    def __init__(self, stage: PipelineStage, message: str | None = None, cause: Exception | None = None):
        super().__init__(message or self.public_message)
        self.stage = stage
        self.cause = cause

    @property
    def upstream_status(self) -> int | None:
        return getattr(self.cause, "status_code", None)


class BadRequest(PipelineError):
    status_code = 400
    public_message = "Query parameter 'query' is missing"


class SearchFailure(PipelineError):
    public_message = "Failed to search"


class FetchFailure(PipelineError):
    public_message = "Failed to fetch site contents"


class SummarizeFailure(PipelineError):
    public_message = "Failed to summarize content"
