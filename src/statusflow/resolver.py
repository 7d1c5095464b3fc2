"""Resolve transition rules into concrete sets of reachable statuses."""

from __future__ import annotations

from statusflow.definition import STATIC_SHAPES, DeferredRule, StaticRule, TransitionRule, WorkflowDefinition
from statusflow.errors import InvalidTransitionRule


def resolve_transitions(rule: TransitionRule, status: str | None = None) -> frozenset[str]:
    """Evaluate a rule at query time.

    Deferred rules are called on every resolution; results are never cached
    because they may depend on external context (permissions, flags).
    Exceptions raised by a producer propagate unchanged.

    Args:
        rule: StaticRule or DeferredRule.
        status: Source status, used in error messages.

    Returns:
        Frozen set of status ids.

    Raises:
        InvalidTransitionRule: If the rule, or what a deferred rule produced,
            cannot be read as a set of statuses.
    """
    if isinstance(rule, StaticRule):
        return rule.targets
    if isinstance(rule, DeferredRule):
        produced = rule.producer()
        if not isinstance(produced, STATIC_SHAPES):
            raise InvalidTransitionRule(
                status, reason=f"deferred rule produced {type(produced).__name__}",
            )
        if not all(isinstance(s, str) for s in produced):
            raise InvalidTransitionRule(status, reason="deferred rule produced non-string statuses")
        return frozenset(produced)
    raise InvalidTransitionRule(status, reason=f"unsupported rule type {type(rule).__name__}")


def transitions_from(definition: WorkflowDefinition, status: str | None) -> frozenset[str]:
    """Resolve the reachable set for a status of ``definition``.

    A status that is not declared (e.g. a legacy persisted value) has no
    rule to evaluate and is reported as InvalidTransitionRule.
    """
    node = definition.node(status)
    if node is None:
        raise InvalidTransitionRule(status, reason="status is not declared in the workflow")
    return resolve_transitions(node.transition, status)


def ordered_transitions(definition: WorkflowDefinition, status: str | None) -> list[str]:
    """Reachable statuses in declaration order.

    Targets a deferred rule produced that the workflow does not declare
    follow, sorted.
    """
    allowed = transitions_from(definition, status)
    ordered = [s for s in definition.status_ids() if s in allowed]
    ordered += sorted(allowed.difference(ordered))
    return ordered
