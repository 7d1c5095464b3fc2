"""Load workflow definitions from YAML or JSON files."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import yaml

from statusflow.definition import WorkflowDefinition
from statusflow.errors import DefinitionError
from statusflow.paths import definition_path

logger = logging.getLogger(__name__)


def read_definition_file(path: Path | str) -> dict:
    """Read and parse a workflow file.

    ``.json`` files are parsed as JSON, everything else as YAML.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        DefinitionError: If the document is malformed or not a mapping.
    """
    def_path = Path(path)
    with open(def_path) as f:
        try:
            if def_path.suffix == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise DefinitionError(f"Cannot parse workflow file {def_path}: {e}") from e

    if not isinstance(data, dict):
        raise DefinitionError(f"Workflow file {def_path} is not a mapping")

    return data


def load_definition_file(path: Path | str) -> WorkflowDefinition:
    """Load a WorkflowDefinition from a file.

    The workflow name defaults to the file stem.
    """
    def_path = Path(path)
    data = read_definition_file(def_path)
    definition = WorkflowDefinition.from_mapping(data, name=data.get("name") or def_path.stem)
    logger.debug(
        "statusflow.definition.loaded",
        extra={"event": "statusflow.definition.loaded", "path": str(def_path)},
    )
    return definition


def load_workflow(name_or_path: Path | str) -> WorkflowDefinition:
    """Load a workflow by file path, or by name from the definitions directory."""
    candidate = Path(name_or_path)
    if candidate.suffix in (".yaml", ".yml", ".json") or candidate.is_file():
        return load_definition_file(candidate)
    return load_definition_file(definition_path(str(name_or_path)))


class FileProvider:
    """Workflow provider backed by a definition file.

    Satisfies the provider capabilities so a file-defined workflow can be
    attached to entities like any class-defined one.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._definition = load_workflow(self.path)

    def status_labels(self) -> dict[str, str]:
        return dict(self._definition.status_labels)

    def status_action_labels(self) -> dict[str, str]:
        return dict(self._definition.status_action_labels)

    def get_definition(self) -> WorkflowDefinition:
        return self._definition
