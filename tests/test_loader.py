"""Tests for definition files and path resolution."""

import pytest

from statusflow.attachment import WorkflowAttachment
from statusflow.accessors import InMemoryRecord
from statusflow.errors import DefinitionError
from statusflow.loader import FileProvider, load_definition_file, load_workflow, read_definition_file
from statusflow.paths import definition_path, definitions_dir

from conftest import FIXTURES


class TestReader:
    def test_read_yaml(self):
        data = read_definition_file(FIXTURES / "order-workflow.yaml")
        assert data["initial_status"] == "draft"
        assert data["statuses"]["pending"]["transitions"] == ["approved", "draft"]

    def test_read_json(self):
        data = read_definition_file(FIXTURES / "approval.json")
        assert data["initialStatus"] == "new"

    def test_read_missing_file(self):
        with pytest.raises(FileNotFoundError):
            read_definition_file("/nonexistent/workflow.yaml")

    def test_not_a_mapping(self):
        with pytest.raises(DefinitionError, match="not a mapping"):
            read_definition_file(FIXTURES / "not-a-mapping.yaml")

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("statuses: [unclosed\n")
        with pytest.raises(DefinitionError, match="Cannot parse"):
            read_definition_file(path)

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(DefinitionError, match="Cannot parse"):
            read_definition_file(path)


class TestLoadDefinition:
    def test_yaml_definition(self):
        d = load_definition_file(FIXTURES / "order-workflow.yaml")
        assert d.name == "order"
        assert d.status_ids() == ["draft", "pending", "approved"]
        assert d.status_labels["approved"] == "Approved"
        assert d.status_action_labels["approved"] == "Approve"
        assert d.is_terminal("approved")

    def test_name_defaults_to_stem(self):
        assert load_definition_file(FIXTURES / "approval.json").name == "approval"

    def test_dangling_target(self):
        with pytest.raises(DefinitionError, match="open -> archived"):
            load_definition_file(FIXTURES / "dangling.yaml")


class TestPaths:
    def test_env_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv("STATUSFLOW_DEFINITIONS_DIR", str(tmp_path))
        assert definitions_dir() == tmp_path

    def test_default_is_cwd_workflows(self, monkeypatch, tmp_path):
        monkeypatch.delenv("STATUSFLOW_DEFINITIONS_DIR", raising=False)
        monkeypatch.chdir(tmp_path)
        assert definitions_dir() == tmp_path / "workflows"

    def test_definition_path_finds_suffix(self, monkeypatch):
        monkeypatch.setenv("STATUSFLOW_DEFINITIONS_DIR", str(FIXTURES))
        assert definition_path("approval") == FIXTURES / "approval.json"
        assert definition_path("order-workflow") == FIXTURES / "order-workflow.yaml"

    def test_definition_path_default_suffix(self, monkeypatch, tmp_path):
        monkeypatch.setenv("STATUSFLOW_DEFINITIONS_DIR", str(tmp_path))
        assert definition_path("missing") == tmp_path / "missing.yaml"

    def test_load_workflow_by_name(self, monkeypatch):
        monkeypatch.setenv("STATUSFLOW_DEFINITIONS_DIR", str(FIXTURES))
        assert load_workflow("order-workflow").initial_status == "draft"

    def test_load_workflow_by_path(self):
        assert load_workflow(FIXTURES / "approval.json").initial_status == "new"

    def test_load_workflow_unknown_name(self, monkeypatch, tmp_path):
        monkeypatch.setenv("STATUSFLOW_DEFINITIONS_DIR", str(tmp_path))
        with pytest.raises(FileNotFoundError):
            load_workflow("nothing-here")


class TestFileProvider:
    def test_capabilities(self):
        provider = FileProvider(FIXTURES / "order-workflow.yaml")
        assert provider.status_labels()["draft"] == "Draft"
        assert provider.status_action_labels()["pending"] == "Submit"
        assert provider.get_definition().initial_status == "draft"

    def test_attach_file_workflow(self):
        record = InMemoryRecord()
        flow = WorkflowAttachment(FileProvider(FIXTURES / "order-workflow.yaml"), record)
        flow.start()
        record.commit(flow)
        assert flow.next_statuses(with_label=True) == [("pending", "Submit")]
        assert flow.status_dropdown(use_action_label=True) == [
            ("draft", "Back to draft"),
            ("pending", "Submit"),
            ("approved", "Approve"),
        ]
