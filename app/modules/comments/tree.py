from typing import Dict, List, Iterable, Optional
from app.modules.comments.schemas import CommentNode
from app.modules.profiles.schemas import ProfileSummary


def build_comment_tree(
    rows: Iterable[dict],
    profiles: Optional[Dict[str, ProfileSummary]] = None
) -> List[CommentNode]:
    """
    Assemble flat comment rows (oldest first) into a reply tree.

    First pass builds a node per row; second pass hangs every reply under its
    parent in row order. Replies whose parent is not in ``rows`` are dropped.
    """
    profiles = profiles or {}
    nodes: Dict[str, CommentNode] = {}
    for row in rows:
        nodes[row["id"]] = CommentNode(
            id=row["id"],
            idea_id=row.get("idea_id") or "",
            user_id=row.get("user_id") or "",
            text=row.get("text") or "",
            created_at=row.get("created_at") or "",
            parent_comment_id=row.get("parent_comment_id"),
            profile=profiles.get(row.get("user_id")),
            replies=[],
        )

    roots: List[CommentNode] = []
    for node in nodes.values():
        if node.parent_comment_id:
            parent = nodes.get(node.parent_comment_id)
            if parent is not None:
                parent.replies.append(node)
        else:
            roots.append(node)
    return roots


def count_comments(nodes: List[CommentNode]) -> int:
    """Total comments in a tree, replies included"""
    return sum(1 + count_comments(node.replies) for node in nodes)
