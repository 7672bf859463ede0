from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class FeedbackCreate(BaseModel):
    rating: int = Field(ge=1, le=5)
    message: str = Field(min_length=1, max_length=2000)


class FeedbackCreated(BaseModel):
    message: str
    feedback_id: int


class FeedbackEntry(BaseModel):
    id: int
    user_name: str
    rating: int
    comment: str
    date: Optional[datetime]
