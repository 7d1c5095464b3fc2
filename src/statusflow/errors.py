"""Exception hierarchy for workflow configuration and transition failures."""


class WorkflowError(Exception):
    """Base class for every error raised by statusflow."""


class ConfigurationError(WorkflowError):
    """The workflow provider or definition cannot be used."""


class MissingCapability(ConfigurationError):
    """The workflow provider lacks a required method."""

    def __init__(self, provider: str, capability: str) -> None:
        self.provider = provider
        self.capability = capability
        super().__init__(f"{provider} is missing required capability: {capability}()")


class DefinitionError(ConfigurationError):
    """A workflow definition is malformed (bad shape, dangling target, ...)."""


class MissingAttribute(WorkflowError):
    """The status attribute does not exist on the entity's persisted schema."""

    def __init__(self, attribute: str, entity_kind: str | None = None) -> None:
        self.attribute = attribute
        self.entity_kind = entity_kind
        where = f" on {entity_kind}" if entity_kind else ""
        super().__init__(f"Missing status attribute{where}: {attribute}")


class TransitionError(WorkflowError, ValueError):
    """A proposed status change was rejected.

    Carries both statuses so callers can build their own message.
    """

    def __init__(self, previous: str | None, next: str | None, message: str) -> None:
        self.previous = previous
        self.next = next
        super().__init__(message)


class UnknownTargetStatus(TransitionError):
    def __init__(self, previous: str | None, next: str | None, workflow: str = "") -> None:
        where = f" in {workflow}" if workflow else ""
        super().__init__(previous, next, f"Status '{next}' is not declared{where}")


class InvalidTransitionRule(TransitionError):
    def __init__(self, previous: str | None, next: str | None = None, reason: str = "") -> None:
        msg = f"Transition rule for status '{previous}' is invalid"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(previous, next, msg)


class TransitionNotAllowed(TransitionError):
    def __init__(self, previous: str | None, next: str | None) -> None:
        super().__init__(previous, next, f"No transition between '{previous}' and '{next}'")
