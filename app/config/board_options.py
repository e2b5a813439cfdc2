"""
Board Options Configuration
Static option lists shared by the idea schemas, the board engine and the
client filter bar (statuses, priorities, tech stacks, business units).
"""

IDEA_STATUSES = [
    "draft",
    "submitted",
    "in_review",
    "approved",
    "in_progress",
    "completed",
    "cancelled",
    "on_hold",
]
DEFAULT_STATUS = "draft"

PRIORITY_LEVELS = ["low", "medium", "high", "critical"]
DEFAULT_PRIORITY = "medium"

# Higher rank sorts first; unknown priorities rank like "medium"
PRIORITY_RANK = {
    "critical": 4,
    "high": 3,
    "medium": 2,
    "low": 1,
}

NOTIFICATION_TYPES = ["status_change", "comments", "updates"]

VOLUNTEER_STATUSES = ["pending", "approved", "rejected"]

TEAM_ROLES = ["leader", "member"]

TECH_STACKS = [
    "React",
    "TypeScript",
    "JavaScript",
    "Python",
    "Java",
    "C#",
    "Go",
    "Node.js",
    "Angular",
    "Vue.js",
    "PostgreSQL",
    "MongoDB",
    "AWS",
    "Azure",
    "GCP",
    "Docker",
    "Kubernetes",
    "Machine Learning",
    "AI",
    "Power BI",
    "Salesforce",
    "SAP",
]

BUSINESS_UNITS = [
    "Engineering",
    "Product",
    "Marketing",
    "Sales",
    "Finance",
    "Human Resources",
    "Operations",
    "Customer Success",
    "Legal",
    "IT",
]

SORT_OPTIONS = ["newest", "oldest", "most-liked", "progress", "priority"]

OWNERSHIP_FILTERS = ["all", "my-ideas"]

GROUPING_OPTIONS = {
    "status": "Status",
    "priority": "Priority",
    "business_unit": "Business Unit",
    "tech_stack": "Tech Stack",
    "created_by": "Creator",
}


def get_board_options():
    """
    Returns the option lists for the board filter bar
    Format: {
        "statuses": [...],
        "priorities": [...],
        "tech_stacks": [...],
        "business_units": [...],
        "sort_options": [...],
        "grouping_options": [{"value": "status", "label": "Status"}, ...]
    }
    """
    return {
        "statuses": list(IDEA_STATUSES),
        "priorities": list(PRIORITY_LEVELS),
        "tech_stacks": list(TECH_STACKS),
        "business_units": list(BUSINESS_UNITS),
        "sort_options": list(SORT_OPTIONS),
        "ownership_filters": list(OWNERSHIP_FILTERS),
        "grouping_options": [
            {"value": value, "label": label} for value, label in GROUPING_OPTIONS.items()
        ],
        "notification_types": list(NOTIFICATION_TYPES),
    }
