from fastapi import APIRouter, Depends, Query
from app.database.supabase_client import get_supabase
from app.modules.board.schemas import (
    BoardQuery, BoardResponse, SortOption, GroupingOption, OwnershipFilter
)
from app.modules.board.engine import build_board
from app.modules.ideas.service import IdeaService
from app.core.dependencies import get_current_user_id
from app.config.board_options import get_board_options
from supabase import Client
from typing import List, Dict, Optional
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/board", tags=["board"])


def get_idea_service(supabase: Client = Depends(get_supabase)) -> IdeaService:
    return IdeaService(supabase)


@router.get("", response_model=BoardResponse)
async def get_board(
    search: Optional[str] = None,
    status: Optional[str] = None,
    priority: Optional[str] = None,
    tech_stack: Optional[str] = None,
    business_unit: Optional[str] = None,
    filter_by: OwnershipFilter = "all",
    sort_by: SortOption = "newest",
    group_by: List[GroupingOption] = Query([]),
    user_data: Dict = Depends(get_current_user_id),
    service: IdeaService = Depends(get_idea_service)
):
    """
    Board view: every idea with like/comment counts, filtered, sorted and grouped.
    Pass group_by several times for nested groups, e.g. ?group_by=status&group_by=tech_stack
    """
    query = BoardQuery(
        search=search,
        status=status,
        priority=priority,
        tech_stack=tech_stack,
        business_unit=business_unit,
        filter_by=filter_by,
        sort_by=sort_by,
        group_by=group_by,
    )
    ideas = service.list_ideas_with_counts(user_data["id"])
    board = build_board(ideas, query, user_data["id"])
    logger.debug(f"Board for {user_data['id']}: {board.matched}/{board.total} ideas, group_by={board.group_by}")
    return board


@router.get("/options")
async def get_options():
    """Static option lists for the filter bar"""
    return get_board_options()
