import json
from typing import Sequence

import httpx
from google.genai import types
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from api.base_client import BaseSummarizer
from api.errors import DecodeError, EmptyResultError, TransportError
from models.site_content import SiteContent
from utils.logger import get_logger
from utils.redaction import redact_url

logger = get_logger(__name__)

SUMMARY_INSTRUCTION = "Summarize the following web pages as one. Be as much factual as possible."


class GeminiPart(BaseModel):
    model_config = ConfigDict(extra="ignore")

    text: str | None = None


class GeminiContent(BaseModel):
    model_config = ConfigDict(extra="ignore")

    role: str | None = None
    parts: list[GeminiPart] = Field(default_factory=list)


class GeminiCandidate(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    content: GeminiContent | None = None
    finish_reason: str | None = Field(default=None, alias="finishReason")

    def text(self) -> str:
        if self.content is None:
            return ""
        return "".join(part.text for part in self.content.parts if part.text)


class GeminiPromptFeedback(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    block_reason: str | None = Field(default=None, alias="blockReason")


class GeminiGenerateContentResponse(BaseModel):
    """generateContent response; ``candidates`` is required unless the prompt was blocked."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    candidates: list[GeminiCandidate] | None = None
    prompt_feedback: GeminiPromptFeedback | None = Field(default=None, alias="promptFeedback")


def build_prompt_message(contents: Sequence[SiteContent]) -> types.Content:
    """One user turn: the fixed instruction followed by one part per page body."""
    parts = [types.Part(text=SUMMARY_INSTRUCTION)]
    parts.extend(types.Part(text=site.content) for site in contents)
    return types.Content(role="user", parts=parts)


def build_request_payload(contents: Sequence[SiteContent]) -> dict:
    message = build_prompt_message(contents)
    return {"contents": [message.model_dump(mode="json", by_alias=True, exclude_none=True)]}


class GeminiSummarizer(BaseSummarizer):
    """
    Summarizes page contents with the Gemini ``generateContent`` REST endpoint.

    The API key travels in the ``key`` query parameter. The full request payload
    and the raw response body are logged; the key is redacted from logged URLs.
    """

    provider = "gemini"

    def __init__(
        self,
        api_key: str,
        endpoint: str,
        timeout_s: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Args:
            api_key: Google Generative Language API key
            endpoint: Full ``...:generateContent`` URL without the key
            timeout_s: Per-request timeout in seconds
            transport: Optional httpx transport (tests use ``httpx.MockTransport``)
        """
        self.api_key = api_key
        self.endpoint = endpoint
        self.timeout_s = timeout_s
        self._transport = transport

    async def summarize(self, contents: Sequence[SiteContent]) -> str:
        payload = build_request_payload(contents)
        logger.info(
            "Payload to generation provider",
            extra={
                "extra_fields": {
                    "endpoint": self.endpoint,
                    "content_count": len(contents),
                    "payload": json.dumps(payload),
                }
            },
        )

        try:
            async with httpx.AsyncClient(timeout=self.timeout_s, transport=self._transport) as client:
                response = await client.post(self.endpoint, params={"key": self.api_key}, json=payload)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(
                "Error making request to generation provider",
                extra={"extra_fields": {"error": str(e), "error_type": type(e).__name__}},
            )
            raise TransportError(f"Gemini request failed: {e}", provider=self.provider) from e

        logger.info(
            "Response from generation provider",
            extra={
                "extra_fields": {
                    "url": redact_url(str(response.request.url)),
                    "upstream_status": response.status_code,
                    "body": response.text,
                }
            },
        )

        if response.is_error:
            raise TransportError(
                f"Gemini returned HTTP {response.status_code}",
                provider=self.provider,
                status_code=response.status_code,
            )

        try:
            parsed = GeminiGenerateContentResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise DecodeError(
                "Gemini response could not be decoded", provider=self.provider, status_code=response.status_code
            ) from e

        return self._first_candidate_text(parsed, response.status_code)

    def _first_candidate_text(self, parsed: GeminiGenerateContentResponse, status_code: int) -> str:
        if parsed.candidates is None:
            if parsed.prompt_feedback and parsed.prompt_feedback.block_reason:
                raise EmptyResultError(
                    f"Gemini blocked the prompt: {parsed.prompt_feedback.block_reason}",
                    provider=self.provider,
                    status_code=status_code,
                )
            raise DecodeError("Gemini response has no candidates field", provider=self.provider, status_code=status_code)

        if not parsed.candidates:
            raise EmptyResultError("no summary returned from the API", provider=self.provider, status_code=status_code)

        text = parsed.candidates[0].text()
        if not text:
            raise EmptyResultError(
                f"first candidate has no text (finish reason: {parsed.candidates[0].finish_reason})",
                provider=self.provider,
                status_code=status_code,
            )
        return text
