"""Transition validation: the gate every status-changing commit passes through."""

from __future__ import annotations

import logging

from statusflow.definition import WorkflowDefinition
from statusflow.errors import TransitionError, TransitionNotAllowed, UnknownTargetStatus
from statusflow.resolver import transitions_from

logger = logging.getLogger(__name__)


def validate(
    definition: WorkflowDefinition,
    previous: str | None,
    next: str | None,
    is_new: bool = False,
) -> None:
    """Check that ``previous -> next`` is a permitted edge.

    New entities and unchanged statuses always pass. Validation never
    mutates anything; it returns None or raises.

    Args:
        definition: Workflow to check against.
        previous: Last persisted status.
        next: Staged status about to be committed.
        is_new: True when the entity has never been persisted.

    Raises:
        UnknownTargetStatus: ``next`` is not declared.
        InvalidTransitionRule: ``previous`` has no usable rule.
        TransitionNotAllowed: ``next`` is declared but not reachable.
    """
    if is_new or previous == next:
        return

    try:
        if not definition.has_status(next):
            raise UnknownTargetStatus(previous, next, definition.name)

        allowed = transitions_from(definition, previous)
        if next not in allowed:
            raise TransitionNotAllowed(previous, next)
    except TransitionError as e:
        # InvalidTransitionRule from the resolver does not know the target
        if e.next is None:
            e.next = next
        logger.warning(
            "statusflow.transition.rejected",
            extra={
                "event": "statusflow.transition.rejected",
                "workflow": definition.name,
                "previous": previous,
                "next": next,
                "reason": type(e).__name__,
            },
        )
        raise

    logger.debug(
        "statusflow.transition.accepted",
        extra={"event": "statusflow.transition.accepted", "previous": previous, "next": next},
    )


def check_transition(
    definition: WorkflowDefinition,
    previous: str | None,
    next: str | None,
) -> tuple[bool, str]:
    """Check a transition without raising.

    Returns:
        (valid, message) tuple.
    """
    try:
        validate(definition, previous, next)
    except TransitionError as e:
        return False, str(e)
    return True, f"{previous} -> {next}"


def can_transition(definition: WorkflowDefinition, previous: str | None, next: str | None) -> bool:
    ok, _ = check_transition(definition, previous, next)
    return ok
