from pydantic import BaseModel
from typing import Optional, List, Literal
from app.modules.ideas.schemas import IdeaWithCounts

SortOption = Literal["newest", "oldest", "most-liked", "progress", "priority"]
GroupingOption = Literal["business_unit", "tech_stack", "status", "priority", "created_by"]
OwnershipFilter = Literal["all", "my-ideas"]


class BoardQuery(BaseModel):
    search: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    tech_stack: Optional[str] = None
    business_unit: Optional[str] = None
    filter_by: OwnershipFilter = "all"
    sort_by: SortOption = "newest"
    group_by: List[GroupingOption] = []


class BoardGroup(BaseModel):
    key: str
    count: int
    ideas: Optional[List[IdeaWithCounts]] = None  # set on the last grouping level
    groups: Optional[List["BoardGroup"]] = None  # set on inner levels


BoardGroup.model_rebuild()


class BoardResponse(BaseModel):
    total: int  # ideas on the board before filtering
    matched: int
    has_filters: bool
    group_by: List[GroupingOption]
    groups: List[BoardGroup]
