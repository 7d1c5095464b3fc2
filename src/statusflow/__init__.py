"""statusflow: declarative status workflows with validated transitions."""

from statusflow.accessors import InMemoryRecord, ObjectAccessor
from statusflow.attachment import EntityAccessor, WorkflowAttachment, WorkflowDefinitionProvider
from statusflow.audit import DefinitionReport, audit_definition
from statusflow.definition import DeferredRule, StaticRule, StatusNode, WorkflowDefinition
from statusflow.errors import (
    ConfigurationError,
    DefinitionError,
    InvalidTransitionRule,
    MissingAttribute,
    MissingCapability,
    TransitionError,
    TransitionNotAllowed,
    UnknownTargetStatus,
    WorkflowError,
)
from statusflow.labels import action_label_for, status_label
from statusflow.loader import FileProvider, load_definition_file, load_workflow
from statusflow.resolver import resolve_transitions, transitions_from
from statusflow.validator import can_transition, check_transition, validate

__all__ = [
    "InMemoryRecord",
    "ObjectAccessor",
    "EntityAccessor",
    "WorkflowAttachment",
    "WorkflowDefinitionProvider",
    "DefinitionReport",
    "audit_definition",
    "DeferredRule",
    "StaticRule",
    "StatusNode",
    "WorkflowDefinition",
    "ConfigurationError",
    "DefinitionError",
    "InvalidTransitionRule",
    "MissingAttribute",
    "MissingCapability",
    "TransitionError",
    "TransitionNotAllowed",
    "UnknownTargetStatus",
    "WorkflowError",
    "action_label_for",
    "status_label",
    "FileProvider",
    "load_definition_file",
    "load_workflow",
    "resolve_transitions",
    "transitions_from",
    "can_transition",
    "check_transition",
    "validate",
]
