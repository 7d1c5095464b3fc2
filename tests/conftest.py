"""Shared test fixtures for statusflow."""

from pathlib import Path

import pytest

from statusflow.accessors import InMemoryRecord
from statusflow.definition import WorkflowDefinition

FIXTURES = Path(__file__).parent / "fixtures"

ORDER_DEFINITION = {
    "initial_status": "draft",
    "statuses": {
        "draft": {"transitions": ["pending"]},
        "pending": {"transitions": ["approved", "draft"]},
        "approved": {"transitions": []},
    },
}


class OrderWorkflow:
    @staticmethod
    def status_labels():
        return {"draft": "Draft", "pending": "Pending", "approved": "Approved"}

    @staticmethod
    def status_action_labels():
        # "draft" deliberately has no action label
        return {"pending": "Submit", "approved": "Approve"}

    @staticmethod
    def get_definition():
        return ORDER_DEFINITION


@pytest.fixture
def definition():
    return WorkflowDefinition.from_mapping(
        ORDER_DEFINITION,
        status_labels=OrderWorkflow.status_labels(),
        status_action_labels=OrderWorkflow.status_action_labels(),
        name="OrderWorkflow",
    )


@pytest.fixture
def record():
    return InMemoryRecord()
