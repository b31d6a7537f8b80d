# backend/lifeos/crud/ai_logs.py
import logging
from typing import Optional

from lifeos.crud.base import utcnow
from lifeos.db.mongo import get_db
from lifeos.schemas.ai import AiActionType

logger = logging.getLogger(__name__)

# prompts can be whole notes; keep the log bounded
MAX_PROMPT_CHARS = 500


def get_ai_logs_collection():
    return get_db()["ai_logs"]


async def create_ai_log(
    user_id: str,
    action_type: AiActionType,
    prompt: Optional[str],
    response: Optional[str],
) -> str:
    doc = {
        "user_id": user_id,
        "action_type": action_type,
        "prompt": prompt[:MAX_PROMPT_CHARS] if prompt else prompt,
        "response": response,
        "created_at": utcnow(),
    }
    result = await get_ai_logs_collection().insert_one(doc)
    logger.debug("ai log %s stored for user %s", action_type, user_id)
    return str(result.inserted_id)
