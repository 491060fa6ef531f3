import json
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class PipelineResponse:
    """
    Result of one search pipeline run.

    links is always the full search result, even though only a prefix of it
    was fetched into the summary.
    """

    summary: str
    links: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"links": list(self.links), "summary": self.summary}

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PipelineResponse":
        return cls(links=list(data.get("links") or []), summary=data["summary"])
