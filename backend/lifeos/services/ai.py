# backend/lifeos/services/ai.py
"""
Thin pass-through to Gemini: build a prompt, call the model, parse the result.
Structured answers are constrained with a pydantic response_schema.
"""
import json
import logging
from datetime import datetime
from functools import lru_cache
from typing import List, Optional

from google import genai

from lifeos.core.config import settings
from lifeos.schemas.ai import GeneratedIdea, GeneratedIdeaList, ParsedTask, ParsedTaskList
from lifeos.schemas.daily_summary import TodayStats
from lifeos.schemas.task import TaskRead

logger = logging.getLogger(__name__)

CONTENT_IDEA_COUNT = 5

PLATFORM_GUIDANCE = {
    "youtube": "longer-form video content (8-20 minutes), tutorials, reviews, vlogs",
    "shorts": "short vertical videos (under 60 seconds), quick tips, hooks, trends",
    "reels": "engaging vertical content (15-90 seconds), trends, entertainment, lifestyle",
}


class AIServiceError(Exception):
    """Provider call failed or returned something unusable."""


@lru_cache
def get_client() -> genai.Client:
    # created lazily so the app imports without an API key
    return genai.Client(api_key=settings.GEMINI_API_KEY)


async def _generate(
    prompt: str,
    *,
    system: str,
    max_tokens: int,
    response_schema=None,
):
    config = {
        "system_instruction": system,
        "max_output_tokens": max_tokens,
    }
    if response_schema is not None:
        config["response_mime_type"] = "application/json"
        config["response_schema"] = response_schema

    try:
        return await get_client().aio.models.generate_content(
            model=settings.GEMINI_MODEL,
            contents=prompt,
            config=config,
        )
    except Exception as e:
        logger.exception("Gemini request failed")
        raise AIServiceError(str(e)) from e


def _text_or(response, fallback: str) -> str:
    text = (getattr(response, "text", None) or "").strip()
    return text or fallback


def _parsed(response, schema):
    """
    response.parsed when the SDK already built the model, else parse response.text.
    """
    parsed = getattr(response, "parsed", None)
    if isinstance(parsed, schema):
        return parsed
    try:
        return schema.model_validate(json.loads(response.text or "{}"))
    except (ValueError, TypeError) as e:
        raise AIServiceError(f"unexpected model output: {e}") from e


# --------------------------------------------------------------------------
# task parsing
# --------------------------------------------------------------------------
async def parse_tasks(text: str) -> List[ParsedTask]:
    system = """You are a task parsing assistant. Parse the user's natural language input into structured tasks.
    Extract:
    - title: the main task description (keep it concise)
    - description: additional details if any
    - priority: "high", "medium", or "low" based on urgency words or context
    - category: infer a category if possible (work, personal, health, education, etc.)
    - dueDate: if a date/time is mentioned, convert to ISO format (YYYY-MM-DD)

    Return JSON with a "tasks" array."""

    response = await _generate(text, system=system, max_tokens=1024, response_schema=ParsedTaskList)
    return _parsed(response, ParsedTaskList).tasks


# --------------------------------------------------------------------------
# schedule
# --------------------------------------------------------------------------
async def generate_schedule(tasks: List[TaskRead], free_time_blocks: str) -> str:
    system = """You are a productivity coach and schedule optimizer. Given a list of tasks and available time blocks,
    create an optimized daily schedule. Consider:
    - Task priorities
    - Due dates
    - Energy levels throughout the day
    - Include breaks

    Format the schedule clearly with times and tasks."""

    task_lines = [
        {
            "title": t.title,
            "priority": t.priority,
            "dueDate": t.due_date.isoformat() if t.due_date else None,
        }
        for t in tasks
    ]
    prompt = f"Tasks: {json.dumps(task_lines)}\n\nAvailable time: {free_time_blocks}"

    response = await _generate(prompt, system=system, max_tokens=1024)
    return _text_or(response, "Unable to generate schedule.")


# --------------------------------------------------------------------------
# note summary
# --------------------------------------------------------------------------
async def summarize_note(content: str) -> str:
    system = """You are a note summarization expert. Create a concise summary of the provided note that:
    - Captures the key points
    - Maintains important details
    - Is easy to scan quickly
    - Uses bullet points for clarity

    Keep the summary under 150 words."""

    response = await _generate(content, system=system, max_tokens=512)
    return _text_or(response, "Unable to summarize note.")


# --------------------------------------------------------------------------
# content ideas
# --------------------------------------------------------------------------
async def generate_content_ideas(niche: str, platform: str) -> List[GeneratedIdea]:
    guidance = PLATFORM_GUIDANCE.get(platform, "video content")
    system = f"""You are a content strategist specializing in {platform}. Generate creative, engaging content ideas for the given niche.
    Platform focus: {guidance}

    For each idea provide:
    - title: catchy, click-worthy title
    - description: brief description of the content and why it would perform well

    Generate {CONTENT_IDEA_COUNT} unique ideas. Return JSON with an "ideas" array."""

    response = await _generate(
        f"Niche: {niche}", system=system, max_tokens=1024, response_schema=GeneratedIdeaList
    )
    return _parsed(response, GeneratedIdeaList).ideas


# --------------------------------------------------------------------------
# daily summary
# --------------------------------------------------------------------------
async def generate_daily_summary(stats: TodayStats) -> str:
    system = """You are an encouraging productivity coach. Create a personalized, motivational daily summary based on the user's accomplishments.

    Be:
    - Encouraging and positive
    - Specific about achievements
    - Provide actionable suggestions for tomorrow
    - Keep it concise (2-3 sentences)

    Don't be overly cheesy, be genuine and supportive."""

    prompt = (
        "Today's stats:\n"
        f"- Tasks completed: {stats.tasks_completed} out of {stats.total_tasks}\n"
        f"- Focus time: {stats.focus_minutes} minutes\n"
        f"- Notes created: {stats.notes_created}"
    )
    response = await _generate(prompt, system=system, max_tokens=256)
    return _text_or(response, "Great work today! Keep pushing forward.")


def parse_due_date(value: Optional[str]):
    """
    'YYYY-MM-DD' (or full ISO) -> datetime, anything unparsable -> None.
    """
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        logger.info("ignoring unparsable due date from model: %r", value)
        return None
