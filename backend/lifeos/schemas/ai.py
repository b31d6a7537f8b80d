# backend/lifeos/schemas/ai.py

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from lifeos.schemas.base import ApiModel, strip_and_reject_blank
from lifeos.schemas.content_idea import ContentIdeaRead, Platform
from lifeos.schemas.task import Priority, TaskRead

AiActionType = Literal[
    "task_parse",
    "schedule_generate",
    "note_summarize",
    "content_generate",
    "daily_summary",
]


# -------------------------
# LLM structured output (response_schema)
# -------------------------
class ParsedTask(BaseModel):
    title: str = Field(description="the main task, kept concise")
    description: Optional[str] = Field(default=None, description="extra details if any")
    priority: Priority = Field(default="medium", description="high, medium or low based on urgency")
    category: Optional[str] = Field(default=None, description="work, personal, health, education ...")
    due_date: Optional[str] = Field(default=None, description="ISO date (YYYY-MM-DD) if a date is mentioned")


class ParsedTaskList(BaseModel):
    tasks: List[ParsedTask] = Field(default_factory=list)


class GeneratedIdea(BaseModel):
    title: str = Field(description="catchy, click-worthy title")
    description: str = Field(description="what the content is and why it would perform well")


class GeneratedIdeaList(BaseModel):
    ideas: List[GeneratedIdea] = Field(default_factory=list)


# -------------------------
# API request/response
# -------------------------
class ParseTasksRequest(ApiModel):
    """
    [Request] POST /api/ai/parse-tasks
    """
    input: str

    @field_validator("input", mode="before")
    @classmethod
    def validate_input(cls, v):
        if not isinstance(v, str):
            raise ValueError("input is required")
        return strip_and_reject_blank(v, "input")


class ParseTasksResponse(ApiModel):
    tasks: List[TaskRead]


class ScheduleRequest(ApiModel):
    """
    [Request] POST /api/ai/generate-schedule
    """
    free_time_blocks: Optional[str] = None


class ScheduleResponse(ApiModel):
    schedule: str


class ContentIdeasRequest(ApiModel):
    """
    [Request] POST /api/ai/generate-content-ideas
    """
    niche: str
    platform: Platform

    @field_validator("niche")
    @classmethod
    def validate_niche(cls, v: str) -> str:
        return strip_and_reject_blank(v, "niche")


class ContentIdeasResponse(ApiModel):
    ideas: List[ContentIdeaRead]
