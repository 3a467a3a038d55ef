"""
Client for the chat-analysis backend that comments on a news item.
"""
import logging
from typing import Optional

import requests
from pydantic import ValidationError as PydanticValidationError

from .config import get_analysis_url
from .errors import ProviderError
from .models.analysis import AnalysisRequest, AnalysisResponse

logger = logging.getLogger(__name__)

DEFAULT_VIX = 20.0


def question_from_article(title: str, description: Optional[str] = None) -> str:
    """Prompt sent when a news item is dropped into the chat."""
    question = f"Analyze this market news: {title.strip()}"
    if description and description.strip():
        question += f"\n\n{description.strip()}"
    return question


def analyze_news(
    request: AnalysisRequest,
    base_url: Optional[str] = None,
    timeout: float = 30,
) -> AnalysisResponse:
    base_url = (base_url or get_analysis_url()).rstrip("/")
    body = {
        "question": request.question,
        "vix": request.vix if request.vix is not None else DEFAULT_VIX,
    }
    logger.info(f"Requesting analysis from {base_url}")

    try:
        resp = requests.post(f"{base_url}/analyze", json=body, timeout=timeout)
        resp.raise_for_status()
        data = resp.json()
    except requests.RequestException as e:
        logger.error(f"Analysis request failed: {e}")
        status = getattr(getattr(e, "response", None), "status_code", None)
        raise ProviderError(
            f"Analysis request failed: {e}",
            {"provider": "analysis", "url": base_url, "status_code": status},
        )
    except ValueError as e:
        raise ProviderError(f"Analysis backend returned malformed JSON: {e}", {"provider": "analysis", "url": base_url})

    try:
        return AnalysisResponse.model_validate(data)
    except PydanticValidationError as e:
        raise ProviderError(f"Unexpected analysis payload: {e.error_count()} invalid field(s)", {"provider": "analysis", "url": base_url})
