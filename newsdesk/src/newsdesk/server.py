"""HTTP endpoint for the dashboard news feed.

Run with: newsdesk serve  (or: uvicorn newsdesk.server:app)
"""
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from .models.article import FeedResponse
from .service import get_feed

logger = logging.getLogger(__name__)


class FeedRequest(BaseModel):
    """Body of a feed request from the dashboard. A null region means "all"."""
    region: Optional[str] = "all"
    date_from: Optional[str] = Field(None, alias="from")
    date_to: Optional[str] = Field(None, alias="to")
    query: Optional[str] = None

    class Config:
        populate_by_name = True


app = FastAPI(title="newsdesk", description="Market news feed for the analysis dashboard")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
)


def _invalid_fields(exc: RequestValidationError) -> str:
    fields = []
    for err in exc.errors():
        # loc is ("body", <field>, ...); a bare ("body",) means the body itself
        loc = [str(part) for part in err.get("loc", ())[1:]]
        fields.append(".".join(loc) or "body")
    return ", ".join(dict.fromkeys(fields))


@app.exception_handler(RequestValidationError)
async def invalid_request(request: Request, exc: RequestValidationError):
    """Malformed bodies still answer with ``{error, articles: []}``."""
    message = f"Invalid request field(s): {_invalid_fields(exc)}"
    logger.warning(f"Rejected {request.url.path} request: {message}")
    feed = FeedResponse(error=message, status=400)
    return JSONResponse(content=feed.to_payload(), status_code=feed.status)


@app.get("/health")
async def health():
    return {"ok": True}


@app.post("/fetch-news")
def fetch_news(request: FeedRequest):
    """Return the aggregated feed; errors keep the ``{error, articles}`` shape."""
    feed = get_feed(request.region, request.date_from, request.date_to, request.query)
    return JSONResponse(content=feed.to_payload(), status_code=feed.status)
