"""
Progress Routes (current user)

GET /progress/dashboard - Scores, video progress per topic, DSA counts
PUT /progress/dsa/{problem_id} - Set a DSA problem solved or unsolved
PUT /progress/watched/{content_id} - Mark a video as watched
"""

from fastapi import APIRouter, Depends

from placement_hub.core.auth import get_current_user
from placement_hub.services.progress_service import ProgressService
from placement_hub.schemas.schemas import DashboardResponse, DsaSolvedUpdate, IdListResponse

router = APIRouter(prefix="/progress", tags=["Progress"])


@router.get("/dashboard", response_model=DashboardResponse)
async def dashboard(user: dict = Depends(get_current_user)):
    return ProgressService().dashboard(user["user_id"])


@router.put("/dsa/{problem_id}", response_model=IdListResponse)
async def set_dsa_solved(problem_id: str, update: DsaSolvedUpdate, user: dict = Depends(get_current_user)):
    """
    Send the state you want (`{"solved": true}` or `false`), not a toggle.
    Repeating the same request leaves the set unchanged.
    """
    ids = ProgressService().set_dsa_solved(user["user_id"], problem_id, update.solved)
    return IdListResponse(ids=ids)


@router.put("/watched/{content_id}", response_model=IdListResponse)
async def mark_watched(content_id: str, user: dict = Depends(get_current_user)):
    ids = ProgressService().mark_watched(user["user_id"], content_id)
    return IdListResponse(ids=ids)
