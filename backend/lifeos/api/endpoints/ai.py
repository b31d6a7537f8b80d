# backend/lifeos/api/endpoints/ai.py
import json
import logging

from fastapi import APIRouter, Depends, HTTPException, status

from lifeos.api.deps import get_current_user_id
from lifeos.crud import ai_logs as ai_log_crud
from lifeos.crud import content_ideas as content_idea_crud
from lifeos.crud import daily_summaries as daily_summary_crud
from lifeos.crud import notes as note_crud
from lifeos.crud import stats as stats_crud
from lifeos.crud import tasks as task_crud
from lifeos.schemas.ai import (
    ContentIdeasRequest,
    ContentIdeasResponse,
    ParseTasksRequest,
    ParseTasksResponse,
    ScheduleRequest,
    ScheduleResponse,
)
from lifeos.schemas.daily_summary import DailySummaryRead
from lifeos.schemas.note import NoteRead
from lifeos.schemas.task import TaskCreate
from lifeos.services import ai as ai_service
from lifeos.services.ai import AIServiceError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/ai", tags=["AI"])

DEFAULT_FREE_TIME = "9am-5pm"


def _ai_failed(action: str, e: AIServiceError) -> HTTPException:
    logger.error("AI %s failed: %s", action, e)
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail=f"Failed to {action}",
    )


# --------------------------------------------------------------------------
# POST /api/ai/parse-tasks
# free text -> structured tasks, stored for the user
# --------------------------------------------------------------------------
@router.post("/parse-tasks", response_model=ParseTasksResponse)
async def parse_tasks(body: ParseTasksRequest, user_id: str = Depends(get_current_user_id)):
    try:
        parsed = await ai_service.parse_tasks(body.input)
    except AIServiceError as e:
        raise _ai_failed("parse tasks", e)

    await ai_log_crud.create_ai_log(
        user_id,
        "task_parse",
        prompt=body.input,
        response=json.dumps([t.model_dump() for t in parsed]),
    )

    created = []
    for task in parsed:
        if not task.title.strip():
            continue
        created.append(await task_crud.create_task(user_id, TaskCreate(
            title=task.title,
            description=task.description,
            priority=task.priority,
            category=task.category,
            due_date=ai_service.parse_due_date(task.due_date),
        )))
    return ParseTasksResponse(tasks=created)


# --------------------------------------------------------------------------
# POST /api/ai/generate-schedule
# plan for the open tasks inside the given free time
# --------------------------------------------------------------------------
@router.post("/generate-schedule", response_model=ScheduleResponse)
async def generate_schedule(body: ScheduleRequest, user_id: str = Depends(get_current_user_id)):
    free_time = body.free_time_blocks or DEFAULT_FREE_TIME
    open_tasks = [t for t in await task_crud.get_tasks(user_id) if not t.completed]

    try:
        schedule = await ai_service.generate_schedule(open_tasks, free_time)
    except AIServiceError as e:
        raise _ai_failed("generate schedule", e)

    await ai_log_crud.create_ai_log(user_id, "schedule_generate", prompt=free_time, response=schedule)
    return ScheduleResponse(schedule=schedule)


# --------------------------------------------------------------------------
# POST /api/ai/summarize-note/{note_id}
# --------------------------------------------------------------------------
@router.post("/summarize-note/{note_id}", response_model=NoteRead)
async def summarize_note(note_id: str, user_id: str = Depends(get_current_user_id)):
    note = await note_crud.get_note(user_id, note_id)
    if not note:
        raise HTTPException(status_code=404, detail="Note not found")

    try:
        summary = await ai_service.summarize_note(note.content)
    except AIServiceError as e:
        raise _ai_failed("summarize note", e)

    await ai_log_crud.create_ai_log(user_id, "note_summarize", prompt=note.content, response=summary)

    updated = await note_crud.set_note_summary(user_id, note_id, summary)
    if not updated:
        raise HTTPException(status_code=404, detail="Note not found")
    return updated


# --------------------------------------------------------------------------
# POST /api/ai/generate-content-ideas
# --------------------------------------------------------------------------
@router.post("/generate-content-ideas", response_model=ContentIdeasResponse)
async def generate_content_ideas(body: ContentIdeasRequest, user_id: str = Depends(get_current_user_id)):
    try:
        ideas = await ai_service.generate_content_ideas(body.niche, body.platform)
    except AIServiceError as e:
        raise _ai_failed("generate content ideas", e)

    await ai_log_crud.create_ai_log(
        user_id,
        "content_generate",
        prompt=f"{body.niche} - {body.platform}",
        response=json.dumps([i.model_dump() for i in ideas]),
    )

    saved = await content_idea_crud.create_content_ideas(user_id, body.niche, body.platform, ideas)
    return ContentIdeasResponse(ideas=saved)


# --------------------------------------------------------------------------
# POST /api/ai/generate-daily-summary
# --------------------------------------------------------------------------
@router.post("/generate-daily-summary", response_model=DailySummaryRead)
async def generate_daily_summary(user_id: str = Depends(get_current_user_id)):
    stats = await stats_crud.get_today_stats(user_id)

    try:
        summary = await ai_service.generate_daily_summary(stats)
    except AIServiceError as e:
        raise _ai_failed("generate daily summary", e)

    await ai_log_crud.create_ai_log(
        user_id,
        "daily_summary",
        prompt=stats.model_dump_json(),
        response=summary,
    )
    return await daily_summary_crud.create_daily_summary(user_id, stats, summary)
