from dataclasses import dataclass, field
from enum import Enum


class PipelineStage(str, Enum):
    IDLE = "idle"
    SEARCHING = "searching"
    FETCHING = "fetching"
    SUMMARIZING = "summarizing"
    DONE = "done"
    FAILED = "failed"


@dataclass
class PipelineRun:
    """Per-request trace of one pipeline execution; never shared."""

    query: str
    request_id: str = "unknown"
    stage: PipelineStage = PipelineStage.IDLE
    history: list[PipelineStage] = field(default_factory=lambda: [PipelineStage.IDLE])
    failed_stage: PipelineStage | None = None

    def advance(self, stage: PipelineStage) -> None:
        self.stage = stage
        self.history.append(stage)

    def fail(self) -> None:
        self.failed_stage = self.stage
        self.advance(PipelineStage.FAILED)
