"""Declarative workflow definitions: statuses, labels and transition rules.

A definition is built once and shared by every entity of a kind, so all
structures here are immutable.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Union

from statusflow.errors import DefinitionError

# Shapes accepted as a static list of target statuses
STATIC_SHAPES = (list, tuple, set, frozenset)


@dataclass(frozen=True)
class StaticRule:
    """Fixed set of reachable statuses."""

    targets: frozenset[str] = frozenset()


@dataclass(frozen=True)
class DeferredRule:
    """Rule evaluated on every query by calling ``producer()``."""

    producer: Callable[[], Iterable[str]]


TransitionRule = Union[StaticRule, DeferredRule]


@dataclass(frozen=True)
class StatusNode:
    """One status of a workflow."""

    transition: TransitionRule = field(default_factory=StaticRule)
    label: str | None = None
    action_label: str | None = None


def make_rule(value: object, status: str = "?") -> TransitionRule:
    """Turn a raw transition value into a rule.

    Args:
        value: Sequence of status ids, a zero-argument callable, or None.
        status: Owning status, used in error messages.

    Returns:
        StaticRule or DeferredRule.

    Raises:
        DefinitionError: If the value has any other shape.
    """
    if isinstance(value, (StaticRule, DeferredRule)):
        return value
    if value is None:
        return StaticRule()
    if isinstance(value, STATIC_SHAPES):
        return StaticRule(frozenset(str(v) for v in value))
    if callable(value):
        return DeferredRule(value)
    raise DefinitionError(
        f"Status '{status}': transition must be a list of statuses or a callable, "
        f"got {type(value).__name__}"
    )


@dataclass(frozen=True)
class WorkflowDefinition:
    """Immutable description of a status graph.

    ``statuses`` keeps insertion order, which is used for display.
    """

    initial_status: str
    statuses: Mapping[str, StatusNode]
    status_labels: Mapping[str, str] = field(default_factory=dict)
    status_action_labels: Mapping[str, str] = field(default_factory=dict)
    name: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "statuses", MappingProxyType(dict(self.statuses)))
        object.__setattr__(self, "status_labels", MappingProxyType(dict(self.status_labels)))
        object.__setattr__(
            self, "status_action_labels", MappingProxyType(dict(self.status_action_labels)),
        )

        if not self.statuses:
            raise DefinitionError(f"Workflow {self.name or '<unnamed>'} declares no statuses")
        if self.initial_status not in self.statuses:
            raise DefinitionError(
                f"Initial status '{self.initial_status}' is not declared "
                f"(declared: {', '.join(self.statuses)})"
            )

        dangling = []
        for status, node in self.statuses.items():
            if isinstance(node.transition, StaticRule):
                for target in sorted(node.transition.targets):
                    if target not in self.statuses:
                        dangling.append(f"{status} -> {target}")
        if dangling:
            raise DefinitionError(f"Transitions to undeclared statuses: {', '.join(dangling)}")

    @classmethod
    def from_mapping(
        cls,
        data: Mapping,
        status_labels: Mapping[str, str] | None = None,
        status_action_labels: Mapping[str, str] | None = None,
        name: str = "",
    ) -> WorkflowDefinition:
        """Build a definition from its declarative mapping form.

        Example::

            {
                "initial_status": "draft",
                "statuses": {
                    "draft": {"transitions": ["pending"], "label": "Draft"},
                    "pending": {"transitions": ["approved", "draft"]},
                    "approved": {"action_label": "Approve"},
                },
            }

        ``initialStatus``, ``status`` and ``transition`` are accepted as
        aliases. Explicit label tables take precedence over per-status labels,
        which fill in statuses the tables leave out.
        """
        if not isinstance(data, Mapping):
            raise DefinitionError(f"Workflow definition must be a mapping, got {type(data).__name__}")

        initial = data.get("initial_status", data.get("initialStatus"))
        if not initial:
            raise DefinitionError("Workflow definition has no initial_status")

        raw_statuses = data.get("statuses", data.get("status"))
        if not isinstance(raw_statuses, Mapping):
            raise DefinitionError("Workflow definition 'statuses' must be a mapping")

        name = name or data.get("name", "")
        labels = dict(status_labels) if status_labels is not None else {}
        action_labels = dict(status_action_labels) if status_action_labels is not None else {}

        nodes: dict[str, StatusNode] = {}
        for status, spec in raw_statuses.items():
            status = str(status)
            if spec is None:
                spec = {}
            elif not isinstance(spec, Mapping):
                # Shorthand: the value is the transition itself
                spec = {"transitions": spec}

            raw_rule = spec.get("transitions", spec.get("transition"))
            nodes[status] = StatusNode(
                transition=make_rule(raw_rule, status),
                label=labels.get(status, spec.get("label")),
                action_label=action_labels.get(status, spec.get("action_label")),
            )

        # Table entries for undeclared statuses are kept for deferred targets
        labels.update({s: n.label for s, n in nodes.items() if n.label is not None})
        action_labels.update(
            {s: n.action_label for s, n in nodes.items() if n.action_label is not None}
        )

        return cls(
            initial_status=str(initial),
            statuses=nodes,
            status_labels=labels,
            status_action_labels=action_labels,
            name=name,
        )

    def has_status(self, status: str | None) -> bool:
        return status in self.statuses

    def node(self, status: str | None) -> StatusNode | None:
        return self.statuses.get(status)

    def status_ids(self) -> list[str]:
        """Statuses in declaration order."""
        return list(self.statuses)

    def is_terminal(self, status: str) -> bool:
        node = self.statuses.get(status)
        return (
            node is not None
            and isinstance(node.transition, StaticRule)
            and not node.transition.targets
        )

    def to_mapping(self) -> dict:
        """Serializable form; deferred rules are rendered as ``None``."""
        statuses = {}
        for status, node in self.statuses.items():
            if isinstance(node.transition, StaticRule):
                transitions = sorted(node.transition.targets)
            else:
                transitions = None
            statuses[status] = {
                "transitions": transitions,
                "label": self.status_labels.get(status),
                "action_label": self.status_action_labels.get(status),
            }
        return {"name": self.name, "initial_status": self.initial_status, "statuses": statuses}
