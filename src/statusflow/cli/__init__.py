"""Command-line inspection of workflow definition files.

Usage:
    statusflow show <workflow>
    statusflow audit <workflow>
    statusflow next <workflow> <status> [--labels]
    statusflow check <workflow> <from> <to>
    statusflow dropdown <workflow> [--actions]

<workflow> is a path to a .yaml/.yml/.json file, or a bare name looked up
in $STATUSFLOW_DEFINITIONS_DIR.
"""

import argparse
import logging
import sys

from statusflow.cli.workflow import cmd_audit, cmd_check, cmd_dropdown, cmd_next, cmd_show


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="statusflow",
        description="Inspect and check status workflow definitions",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )
    sub = parser.add_subparsers(dest="command")

    show = sub.add_parser("show", help="Show statuses, labels and transitions")
    show.add_argument("workflow")

    audit = sub.add_parser("audit", help="Audit reachability and labels")
    audit.add_argument("workflow")

    nxt = sub.add_parser("next", help="List statuses reachable from a status")
    nxt.add_argument("workflow")
    nxt.add_argument("status")
    nxt.add_argument(
        "--labels", action="store_true",
        help="Show the action label of each status",
    )

    check = sub.add_parser("check", help="Check a single transition")
    check.add_argument("workflow")
    check.add_argument("source")
    check.add_argument("target")

    dropdown = sub.add_parser("dropdown", help="List every status with its label")
    dropdown.add_argument("workflow")
    dropdown.add_argument(
        "--actions", action="store_true",
        help="Use action labels instead of status labels",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    dispatch = {
        "show": cmd_show,
        "audit": cmd_audit,
        "next": cmd_next,
        "check": cmd_check,
        "dropdown": cmd_dropdown,
    }
    return dispatch[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
