"""Welcome page."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["Home"])

WELCOME_TEXT = "Welcome to 2e100"


@router.get("/", response_class=PlainTextResponse)
async def home():
    return WELCOME_TEXT
