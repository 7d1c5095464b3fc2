"""Per-entity workflow facade.

An attachment binds one entity (through an accessor) to one workflow
provider. The entity owns its status value; the attachment only reads and
writes it through the accessor.

Usage::

    class OrderWorkflow:
        @staticmethod
        def status_labels():
            return {"draft": "Draft", "pending": "Pending"}

        @staticmethod
        def status_action_labels():
            return {"pending": "Submit"}

        @staticmethod
        def get_definition():
            return {"initial_status": "draft", "statuses": {...}}

    flow = WorkflowAttachment(OrderWorkflow, record)
    flow.start()
"""

from __future__ import annotations

import importlib
from collections.abc import Mapping
from dataclasses import replace
from typing import Any, Protocol, runtime_checkable

from statusflow.definition import WorkflowDefinition
from statusflow.errors import ConfigurationError, InvalidTransitionRule, MissingAttribute, MissingCapability
from statusflow.labels import action_label_for, labelled, status_label
from statusflow.resolver import ordered_transitions, transitions_from
from statusflow.validator import validate

REQUIRED_CAPABILITIES = ("status_labels", "status_action_labels", "get_definition")


@runtime_checkable
class WorkflowDefinitionProvider(Protocol):
    def status_labels(self) -> Mapping[str, str]: ...

    def status_action_labels(self) -> Mapping[str, str]: ...

    def get_definition(self) -> WorkflowDefinition | Mapping: ...


@runtime_checkable
class EntityAccessor(Protocol):
    """What the persistence layer must expose to an attachment."""

    def column_exists(self, entity_kind: str | None, attribute: str) -> bool: ...

    def get_field(self, attribute: str) -> str | None: ...

    def set_field(self, attribute: str, value: str | None) -> None: ...

    def get_persisted_field(self, attribute: str) -> str | None: ...

    def is_new_entity(self) -> bool: ...


def resolve_provider(provider: Any) -> Any:
    """Resolve a provider given as an object or an import path.

    Accepts ``"package.module:Name"`` or ``"package.module.Name"``.

    Raises:
        ConfigurationError: If the path cannot be imported.
    """
    if not isinstance(provider, str):
        if provider is None:
            raise ConfigurationError("No workflow provider given")
        return provider

    if ":" in provider:
        module_name, _, attr = provider.partition(":")
    else:
        module_name, _, attr = provider.rpartition(".")
    if not module_name or not attr:
        raise ConfigurationError(f"Unable to load workflow provider: {provider}")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigurationError(f"Unable to load workflow provider: {provider} ({e})") from e
    try:
        return getattr(module, attr)
    except AttributeError as e:
        raise ConfigurationError(f"Unable to load workflow provider: {provider}") from e


def provider_name(provider: Any) -> str:
    """Short class name of a provider, or "" when it has none."""
    if isinstance(provider, type):
        return provider.__name__
    if provider is None or isinstance(provider, str):
        return ""
    return type(provider).__name__


def require_capabilities(provider: Any) -> None:
    """Raise MissingCapability unless the provider has every required method."""
    name = provider_name(provider) or repr(provider)
    for capability in REQUIRED_CAPABILITIES:
        if not callable(getattr(provider, capability, None)):
            raise MissingCapability(name, capability)


def definition_from_provider(provider: Any) -> WorkflowDefinition:
    """Fetch the definition, building it from the mapping form if needed.

    The provider's label tables always apply; a prebuilt definition keeps
    its own labels only for statuses the provider does not label.
    """
    raw = provider.get_definition()
    if isinstance(raw, WorkflowDefinition):
        return replace(
            raw,
            status_labels={**raw.status_labels, **provider.status_labels()},
            status_action_labels={**raw.status_action_labels, **provider.status_action_labels()},
        )
    return WorkflowDefinition.from_mapping(
        raw,
        status_labels=provider.status_labels(),
        status_action_labels=provider.status_action_labels(),
        name=provider_name(provider),
    )


class WorkflowAttachment:
    """Workflow operations for a single entity instance."""

    def __init__(
        self,
        provider: Any,
        accessor: EntityAccessor,
        attribute: str = "status",
        entity_kind: str | None = None,
    ) -> None:
        self.provider = resolve_provider(provider)
        require_capabilities(self.provider)
        self.definition = definition_from_provider(self.provider)
        self.accessor = accessor
        self.attribute = attribute
        self.entity_kind = entity_kind
        self._attribute_checked = False

    @property
    def workflow_name(self) -> str:
        return provider_name(self.provider)

    def _status_attribute(self) -> str:
        if not self._attribute_checked:
            if not self.accessor.column_exists(self.entity_kind, self.attribute):
                raise MissingAttribute(self.attribute, self.entity_kind)
            self._attribute_checked = True
        return self.attribute

    def start(self) -> None:
        """Set the entity's status to the workflow's initial status."""
        self.accessor.set_field(self._status_attribute(), self.definition.initial_status)

    def propose_status(self, status: str) -> bool:
        """Stage a new status. Nothing is validated until commit.

        An entity without a status has not been started and is left alone.

        Returns:
            True if the status was staged.
        """
        attribute = self._status_attribute()
        if self.accessor.get_field(attribute) is None:
            return False
        self.accessor.set_field(attribute, status)
        return True

    def current_status(self) -> str | None:
        return self.accessor.get_field(self._status_attribute())

    def status_label(self) -> str | None:
        """State label of the current status."""
        return status_label(self.definition, self.current_status())

    def next_statuses(self, with_label: bool = False) -> list:
        """Statuses reachable from the current one.

        With ``with_label``, each entry is ``(status, action_label)``. Order
        follows declaration order of the workflow.
        """
        current = self.current_status()
        if not self.definition.has_status(current):
            return []
        ordered = ordered_transitions(self.definition, current)
        if with_label:
            return [(s, action_label_for(self.definition, s)) for s in ordered]
        return ordered

    def can_transition_to(self, status: str) -> bool:
        """Non-raising reachability check from the current status."""
        current = self.current_status()
        if current is None:
            return False
        if current == status:
            return True
        if not self.definition.has_status(status):
            return False
        try:
            return status in transitions_from(self.definition, current)
        except InvalidTransitionRule:
            return False

    def status_dropdown(self, use_action_label: bool = False) -> list[tuple[str, str | None]]:
        """Every declared status, paired with its state or action label."""
        return labelled(self.definition, self.definition.status_ids(), action=use_action_label)

    def validate_before_commit(self) -> None:
        """Pre-commit hook: compare the persisted status with the staged one.

        Raises the validator's TransitionError unchanged; the caller must
        abort the write.
        """
        attribute = self._status_attribute()
        validate(
            self.definition,
            self.accessor.get_persisted_field(attribute),
            self.accessor.get_field(attribute),
            is_new=self.accessor.is_new_entity(),
        )
