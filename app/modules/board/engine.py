"""
Board engine: filter, sort and multi-level grouping of ideas already fetched
with their counts. Everything here is pure and works on in-memory lists.
"""

from typing import List, Dict, Optional
from app.modules.board.schemas import BoardQuery, BoardGroup, BoardResponse
from app.modules.ideas.schemas import IdeaWithCounts
from app.config.board_options import PRIORITY_RANK, DEFAULT_STATUS, DEFAULT_PRIORITY

ALL_IDEAS_GROUP = "All Ideas"
NO_BUSINESS_UNIT = "No Business Unit"
NO_TECH_STACK = "No Tech Stack"
UNKNOWN_CREATOR = "Unknown"


def _active(value: Optional[str]) -> bool:
    return bool(value) and value != "all"


def has_filters(query: BoardQuery) -> bool:
    return (
        bool(query.search and query.search.strip())
        or query.filter_by == "my-ideas"
        or any(_active(v) for v in (query.status, query.priority, query.tech_stack, query.business_unit))
    )


def matches(idea: IdeaWithCounts, query: BoardQuery, user_id: Optional[str]) -> bool:
    if query.search and query.search.strip():
        term = query.search.strip().lower()
        haystacks = (idea.title, idea.description, idea.business_unit)
        if not any(h and term in h.lower() for h in haystacks):
            return False
    if _active(query.status) and idea.status != query.status:
        return False
    if _active(query.priority) and idea.priority_level != query.priority:
        return False
    if _active(query.tech_stack) and query.tech_stack not in (idea.techstack or []):
        return False
    if _active(query.business_unit) and idea.business_unit != query.business_unit:
        return False
    if query.filter_by == "my-ideas" and idea.created_by != user_id:
        return False
    return True


def filter_ideas(ideas: List[IdeaWithCounts], query: BoardQuery, user_id: Optional[str]) -> List[IdeaWithCounts]:
    return [idea for idea in ideas if matches(idea, query, user_id)]


def _created_ts(idea: IdeaWithCounts) -> float:
    return idea.created_at.timestamp() if idea.created_at else 0.0


def sort_ideas(ideas: List[IdeaWithCounts], sort_by: str = "newest") -> List[IdeaWithCounts]:
    """Stable sort; ties keep the incoming order"""
    if sort_by == "oldest":
        return sorted(ideas, key=_created_ts)
    if sort_by == "most-liked":
        return sorted(ideas, key=lambda i: i.likes_count, reverse=True)
    if sort_by == "progress":
        return sorted(ideas, key=lambda i: i.progress_percentage or 0, reverse=True)
    if sort_by == "priority":
        return sorted(
            ideas,
            key=lambda i: PRIORITY_RANK.get(i.priority_level, PRIORITY_RANK[DEFAULT_PRIORITY]),
            reverse=True,
        )
    return sorted(ideas, key=_created_ts, reverse=True)


def group_values(idea: IdeaWithCounts, grouping: str) -> List[str]:
    """Group keys an idea belongs to for one grouping level. Only tech_stack yields several."""
    if grouping == "business_unit":
        return [idea.business_unit or NO_BUSINESS_UNIT]
    if grouping == "status":
        return [idea.status or DEFAULT_STATUS]
    if grouping == "priority":
        return [idea.priority_level or DEFAULT_PRIORITY]
    if grouping == "created_by":
        return [idea.created_by or UNKNOWN_CREATOR]
    if grouping == "tech_stack":
        techs = [t for t in (idea.techstack or []) if t]
        return list(dict.fromkeys(techs)) or [NO_TECH_STACK]
    return ["Other"]


def _distinct_count(ideas: List[IdeaWithCounts]) -> int:
    return len({idea.id for idea in ideas})


def group_ideas(ideas: List[IdeaWithCounts], groupings: List[str]) -> List[BoardGroup]:
    """
    Partition ideas level by level. Group order follows first appearance in the
    (already sorted) input; ideas keep their order inside each group.
    """
    groupings = list(dict.fromkeys(groupings))
    if not groupings:
        return [BoardGroup(key=ALL_IDEAS_GROUP, count=_distinct_count(ideas), ideas=list(ideas))]

    first, rest = groupings[0], groupings[1:]
    buckets: Dict[str, List[IdeaWithCounts]] = {}
    for idea in ideas:
        for value in group_values(idea, first):
            buckets.setdefault(value, []).append(idea)

    groups = []
    for key, members in buckets.items():
        if rest:
            groups.append(BoardGroup(key=key, count=_distinct_count(members), groups=group_ideas(members, rest)))
        else:
            groups.append(BoardGroup(key=key, count=_distinct_count(members), ideas=members))
    return groups


def build_board(ideas: List[IdeaWithCounts], query: BoardQuery, user_id: Optional[str]) -> BoardResponse:
    """Filter, then sort, then group"""
    filtered = sort_ideas(filter_ideas(ideas, query, user_id), query.sort_by)
    group_by = list(dict.fromkeys(query.group_by))
    groups = group_ideas(filtered, group_by) if filtered else []
    return BoardResponse(
        total=len(ideas),
        matched=len(filtered),
        has_filters=has_filters(query),
        group_by=group_by,
        groups=groups,
    )
