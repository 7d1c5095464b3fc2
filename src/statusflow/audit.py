"""Static analysis of a workflow definition: reachability, terminals, labels."""

from collections import deque
from dataclasses import dataclass, field

from statusflow.definition import DeferredRule, WorkflowDefinition


@dataclass
class DefinitionReport:
    """Result of auditing a workflow definition."""

    name: str = ""
    total_statuses: int = 0
    total_edges: int = 0
    unreachable: list[str] = field(default_factory=list)
    terminal: list[str] = field(default_factory=list)
    self_loops: list[str] = field(default_factory=list)
    deferred: list[str] = field(default_factory=list)
    missing_labels: list[str] = field(default_factory=list)
    missing_action_labels: list[str] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return len(self.unreachable) == 0 and len(self.self_loops) == 0

    @property
    def violations(self) -> list[str]:
        v = []
        for s in self.unreachable:
            v.append(f"Unreachable: {s}")
        for s in self.self_loops:
            v.append(f"Self-loop: {s} -> {s}")
        return v

    def summary(self) -> str:
        lines = [f"Workflow Audit: {self.name or '<unnamed>'}", "=" * 40]
        lines.append(f"  Statuses: {self.total_statuses}")
        lines.append(f"  Static edges: {self.total_edges}")
        if self.terminal:
            lines.append(f"  Terminal: {', '.join(self.terminal)}")
        if self.deferred:
            lines.append(f"  Deferred rules (not traversed): {', '.join(self.deferred)}")
        if self.violations:
            lines.append(f"\nVIOLATIONS ({len(self.violations)}):")
            for v in self.violations:
                lines.append(f"  {v}")
        if self.missing_labels:
            lines.append(f"\nWARNINGS: missing labels for {', '.join(self.missing_labels)}")
        if self.missing_action_labels:
            lines.append(f"WARNINGS: missing action labels for {', '.join(self.missing_action_labels)}")
        lines.append(f"\nResult: {'PASS' if self.passed else 'FAIL'}")
        return "\n".join(lines)


def audit_definition(definition: WorkflowDefinition) -> DefinitionReport:
    """Audit a definition.

    Checks:
    1. Every status is reachable from the initial status
    2. No status lists itself as a target
    3. Terminal statuses (empty static rule)
    4. Label completeness (warnings only)

    Deferred rules are not evaluated: their targets depend on runtime
    context, so the unreachable check is skipped once a reachable status
    has a deferred rule.

    Args:
        definition: Definition to audit.

    Returns:
        DefinitionReport with all findings.
    """
    report = DefinitionReport(name=definition.name, total_statuses=len(definition.statuses))

    adj: dict[str, list[str]] = {}
    for status, node in definition.statuses.items():
        if isinstance(node.transition, DeferredRule):
            report.deferred.append(status)
            adj[status] = []
            continue
        targets = sorted(node.transition.targets)
        adj[status] = targets
        report.total_edges += len(targets)
        if not targets:
            report.terminal.append(status)
        if status in targets:
            report.self_loops.append(status)

    # BFS from the initial status
    seen = {definition.initial_status}
    queue = deque([definition.initial_status])
    while queue:
        current = queue.popleft()
        for neighbor in adj.get(current, []):
            if neighbor not in seen:
                seen.add(neighbor)
                queue.append(neighbor)

    deferred_reached = any(s in seen for s in report.deferred)
    if not deferred_reached:
        report.unreachable = [s for s in definition.statuses if s not in seen]

    for status in definition.statuses:
        if status not in definition.status_labels:
            report.missing_labels.append(status)
        if status not in definition.status_action_labels:
            report.missing_action_labels.append(status)

    return report
