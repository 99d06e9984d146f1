"""Editorial workflow rules: article lifecycle and approval consensus."""

from editorial_portal.workflow.consensus import (
    DecisionResult,
    DecisionSubmitter,
    ReviewState,
    load_history,
    review_state,
    reviewed_map,
    reviewing_role,
    validate_decision,
)
from editorial_portal.workflow.lifecycle import (
    ArticleActions,
    available_actions,
    can_delete,
    can_edit,
    can_send_to_review,
    is_owner,
)

__all__ = [
    "ArticleActions",
    "DecisionResult",
    "DecisionSubmitter",
    "ReviewState",
    "available_actions",
    "can_delete",
    "can_edit",
    "can_send_to_review",
    "is_owner",
    "load_history",
    "review_state",
    "reviewed_map",
    "reviewing_role",
    "validate_decision",
]
