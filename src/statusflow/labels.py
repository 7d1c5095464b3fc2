"""Display labels for statuses and for the actions that lead into them."""

from statusflow.definition import WorkflowDefinition


def status_label(definition: WorkflowDefinition, status: str | None) -> str | None:
    """State name of ``status`` (e.g. pending -> "Pending"), or None."""
    return definition.status_labels.get(status)


def action_label_for(definition: WorkflowDefinition, status: str | None) -> str | None:
    """Label of the action that moves an entity into ``status``.

    e.g. approved -> "Approve". Missing entries yield None, never an error.
    """
    return definition.status_action_labels.get(status)


def labelled(
    definition: WorkflowDefinition,
    statuses: list[str],
    action: bool = False,
) -> list[tuple[str, str | None]]:
    """Pair each status with its state label, or its action label."""
    lookup = action_label_for if action else status_label
    return [(s, lookup(definition, s)) for s in statuses]
