"""Ready-made entity accessors.

Persistence layers normally implement the accessor protocol themselves;
these cover plain objects and in-memory records (tests, scripts).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

_MISSING = object()


@dataclass
class InMemoryRecord:
    """Dict-backed record with a staged/persisted split.

    ``values`` holds the in-memory (staged) fields, ``persisted`` the last
    committed snapshot, or None before the first commit.
    """

    columns: set[str] = field(default_factory=lambda: {"status"})
    values: dict[str, Any] = field(default_factory=dict)
    persisted: dict[str, Any] | None = None
    kind: str = "record"

    def column_exists(self, entity_kind: str | None, attribute: str) -> bool:
        return attribute in self.columns

    def get_field(self, attribute: str) -> Any:
        return self.values.get(attribute)

    def set_field(self, attribute: str, value: Any) -> None:
        self.values[attribute] = value

    def get_persisted_field(self, attribute: str) -> Any:
        if self.persisted is None:
            return None
        return self.persisted.get(attribute)

    def is_new_entity(self) -> bool:
        return self.persisted is None

    def commit(self, attachment=None) -> None:
        """Snapshot ``values`` as persisted.

        When an attachment is given its pre-commit hook runs first; a
        rejected transition propagates and the snapshot is left untouched.
        """
        if attachment is not None:
            attachment.validate_before_commit()
        self.persisted = dict(self.values)


class ObjectAccessor:
    """Expose attributes of any Python object through the accessor protocol.

    Works with slotted objects and properties. Only the tracked attributes
    (``attributes`` plus any read or written through the accessor) are
    snapshotted; call ``mark_persisted()`` after the object has been written
    to storage.
    """

    def __init__(self, obj: Any, persisted: bool = False, attributes: tuple[str, ...] = ("status",)) -> None:
        self.obj = obj
        self._attributes = list(attributes)
        self._snapshot: dict[str, Any] | None = None
        if persisted:
            self.mark_persisted()

    def _track(self, attribute: str) -> None:
        if attribute not in self._attributes:
            self._attributes.append(attribute)

    def column_exists(self, entity_kind: str | None, attribute: str) -> bool:
        return getattr(self.obj, attribute, _MISSING) is not _MISSING

    def get_field(self, attribute: str) -> Any:
        self._track(attribute)
        return getattr(self.obj, attribute, None)

    def set_field(self, attribute: str, value: Any) -> None:
        self._track(attribute)
        setattr(self.obj, attribute, value)

    def get_persisted_field(self, attribute: str) -> Any:
        if self._snapshot is None:
            return None
        return self._snapshot.get(attribute)

    def is_new_entity(self) -> bool:
        return self._snapshot is None

    def mark_persisted(self) -> None:
        self._snapshot = {a: getattr(self.obj, a, None) for a in self._attributes}
