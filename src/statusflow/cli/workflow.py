"""Workflow definition CLI commands."""

import argparse

from statusflow.errors import WorkflowError
from statusflow.loader import load_workflow


def _load(args: argparse.Namespace):
    try:
        return load_workflow(args.workflow)
    except FileNotFoundError as e:
        print(f"ERROR: Workflow file not found: {e.filename or args.workflow}")
    except WorkflowError as e:
        print(f"ERROR: {e}")
    return None


def cmd_show(args: argparse.Namespace) -> int:
    from statusflow.definition import StaticRule

    definition = _load(args)
    if definition is None:
        return 1

    print(f"Workflow: {definition.name}")
    print("─" * 40)
    print(f"  Initial status: {definition.initial_status}")
    print(f"  Statuses: {len(definition.statuses)}\n")
    for status, node in definition.statuses.items():
        label = definition.status_labels.get(status) or "-"
        action = definition.status_action_labels.get(status) or "-"
        if isinstance(node.transition, StaticRule):
            targets = ", ".join(sorted(node.transition.targets)) or "none (terminal)"
        else:
            targets = "<deferred>"
        print(f"  {status:<20} label={label}  action={action}")
        print(f"    -> {targets}")
    return 0


def cmd_audit(args: argparse.Namespace) -> int:
    from statusflow.audit import audit_definition

    definition = _load(args)
    if definition is None:
        return 1

    result = audit_definition(definition)
    print(result.summary())
    return 0 if result.passed else 1


def cmd_next(args: argparse.Namespace) -> int:
    from statusflow.labels import action_label_for
    from statusflow.resolver import ordered_transitions

    definition = _load(args)
    if definition is None:
        return 1

    try:
        allowed = ordered_transitions(definition, args.status)
    except WorkflowError as e:
        print(f"ERROR: {e}")
        return 1

    if not allowed:
        print(f"  {args.status} is terminal")
        return 0
    for status in allowed:
        if args.labels:
            print(f"  {status}  ({action_label_for(definition, status) or '-'})")
        else:
            print(f"  {status}")
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    from statusflow.validator import check_transition

    definition = _load(args)
    if definition is None:
        return 1

    ok, msg = check_transition(definition, args.source, args.target)
    print(f"  {msg}")
    if ok:
        print("  Transition is valid.")
    return 0 if ok else 1


def cmd_dropdown(args: argparse.Namespace) -> int:
    from statusflow.labels import labelled

    definition = _load(args)
    if definition is None:
        return 1

    for status, label in labelled(definition, definition.status_ids(), action=args.actions):
        print(f"  {status:<20} {label or '-'}")
    return 0
