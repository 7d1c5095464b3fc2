"""Tests for transition rule resolution."""

import pytest

from statusflow.definition import DeferredRule, StaticRule, StatusNode, WorkflowDefinition
from statusflow.errors import InvalidTransitionRule
from statusflow.resolver import ordered_transitions, resolve_transitions, transitions_from


class TestResolveTransitions:
    def test_static_returned_as_is(self):
        rule = StaticRule(frozenset({"a", "b"}))
        assert resolve_transitions(rule) is rule.targets

    def test_deferred_is_called(self):
        assert resolve_transitions(DeferredRule(lambda: ["a", "b"])) == frozenset({"a", "b"})

    @pytest.mark.parametrize("produced", [["a"], ("a",), {"a"}, frozenset({"a"})])
    def test_deferred_accepts_collections(self, produced):
        assert resolve_transitions(DeferredRule(lambda: produced)) == frozenset({"a"})

    def test_deferred_not_cached(self):
        calls = []

        def producer():
            calls.append(1)
            return ["a"] if len(calls) == 1 else ["b"]

        rule = DeferredRule(producer)
        assert resolve_transitions(rule) == frozenset({"a"})
        assert resolve_transitions(rule) == frozenset({"b"})
        assert len(calls) == 2

    @pytest.mark.parametrize("produced", [None, "pending", {"a": 1}, 42])
    def test_deferred_bad_shape(self, produced):
        with pytest.raises(InvalidTransitionRule) as exc_info:
            resolve_transitions(DeferredRule(lambda: produced), "draft")
        assert exc_info.value.previous == "draft"

    def test_deferred_non_string_members(self):
        with pytest.raises(InvalidTransitionRule, match="non-string"):
            resolve_transitions(DeferredRule(lambda: [1, 2]), "draft")

    def test_producer_errors_propagate(self):
        def producer():
            raise PermissionError("denied")

        with pytest.raises(PermissionError, match="denied"):
            resolve_transitions(DeferredRule(producer))

    def test_unknown_rule_type(self):
        with pytest.raises(InvalidTransitionRule):
            resolve_transitions(["a"], "draft")


class TestTransitionsFrom:
    def test_declared_status(self, definition):
        assert transitions_from(definition, "pending") == frozenset({"approved", "draft"})

    def test_terminal_status(self, definition):
        assert transitions_from(definition, "approved") == frozenset()

    def test_undeclared_status(self, definition):
        with pytest.raises(InvalidTransitionRule, match="legacy") as exc_info:
            transitions_from(definition, "legacy")
        assert exc_info.value.previous == "legacy"

    def test_permission_gated_rule(self):
        allowed = {"manager": True}

        def approve_targets():
            return ["approved"] if allowed["manager"] else []

        d = WorkflowDefinition(
            initial_status="pending",
            statuses={
                "pending": StatusNode(DeferredRule(approve_targets)),
                "approved": StatusNode(),
            },
        )
        assert transitions_from(d, "pending") == frozenset({"approved"})
        allowed["manager"] = False
        assert transitions_from(d, "pending") == frozenset()


class TestOrderedTransitions:
    def test_declaration_order(self, definition):
        assert ordered_transitions(definition, "pending") == ["draft", "approved"]

    def test_undeclared_deferred_targets_last(self):
        d = WorkflowDefinition(
            initial_status="a",
            statuses={
                "a": StatusNode(DeferredRule(lambda: ["zeta", "b", "external"])),
                "b": StatusNode(),
            },
        )
        assert ordered_transitions(d, "a") == ["b", "external", "zeta"]

    def test_undeclared_status(self, definition):
        with pytest.raises(InvalidTransitionRule):
            ordered_transitions(definition, "legacy")
