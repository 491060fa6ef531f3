"""Search endpoint: web search, page fetch and summary for one query."""

from fastapi import APIRouter, Depends, Request

from orchestrator.core import SearchPipeline
from server.dependencies import get_pipeline
from server.schemas.responses import SearchResponseDTO
from server.utils import get_request_id

router = APIRouter(tags=["Search"])


@router.get("/search", response_model=SearchResponseDTO)
async def search(
    request: Request,
    query: str | None = None,
    pipeline: SearchPipeline = Depends(get_pipeline),
):
    """
    Search the web for ``query`` and summarize the top results.

    Errors are plain text: 400 when the query is missing, 500 when any stage fails.
    """
    result = await pipeline.run(query, request_id=get_request_id(request))
    return SearchResponseDTO.from_pipeline_response(result)
