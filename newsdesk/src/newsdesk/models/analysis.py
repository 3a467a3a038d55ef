from typing import Optional
from pydantic import BaseModel, Field

class AnalysisRequest(BaseModel):
    question: str
    vix: Optional[float] = 20.0

class AnalysisResponse(BaseModel):
    """
    Commentary returned by the chat-analysis backend.
    """
    analysis: str
    category: str
    token: float
    event_count: int = Field(..., alias="eventCount")
    alpha: Optional[float] = None
    beta: Optional[float] = None
    relevant: bool

    class Config:
        populate_by_name = True
