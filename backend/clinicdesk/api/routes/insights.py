"""AI insights for the admin dashboard. Never fails: an empty list means no insights."""
from typing import List

from fastapi import APIRouter, Depends

from clinic_ai.insight_schema import Insight
from clinicdesk.api.deps import get_insight_gateway, get_state
from clinicdesk.services.insight_service import InsightGateway
from clinicdesk.services.state import AppState

router = APIRouter()


@router.get("", response_model=List[Insight])
async def get_insights(
    state: AppState = Depends(get_state),
    gateway: InsightGateway = Depends(get_insight_gateway),
):
    """Runs off the event loop so other requests are served while the provider answers."""
    return await gateway.get_insights_async(state.sales, state.medicines)
