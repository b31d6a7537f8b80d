# backend/lifeos/api/endpoints/daily_summary.py
from typing import Optional

from fastapi import APIRouter, Depends

from lifeos.api.deps import get_current_user_id
from lifeos.crud import daily_summaries as daily_summary_crud
from lifeos.crud import stats as stats_crud
from lifeos.schemas.daily_summary import DailySummaryRead, TodayStats

router = APIRouter(prefix="/api", tags=["Daily Summary"])


@router.get("/daily-summary", response_model=Optional[DailySummaryRead])
async def read_daily_summary(user_id: str = Depends(get_current_user_id)):
    """
    Today's summary, or null if none was generated yet.
    """
    return await daily_summary_crud.get_daily_summary(user_id)


@router.get("/stats/today", response_model=TodayStats)
async def read_today_stats(user_id: str = Depends(get_current_user_id)):
    return await stats_crud.get_today_stats(user_id)
