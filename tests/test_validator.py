"""Tests for component validation."""

import pytest
from component_installer import ComponentValidationError
from component_installer import FailureReason
from component_installer import InMemoryKnowledgeStore
from component_installer import check_component
from component_installer import validate_component


@pytest.fixture
def store():
    store = InMemoryKnowledgeStore()
    store.add_component("part_ui", address="https://github.com/org/ui")
    return store


def reason_for(store: InMemoryKnowledgeStore, identifier: str) -> FailureReason:
    with pytest.raises(ComponentValidationError) as exc_info:
        check_component(store, store.find_by_identifier(identifier))
    return exc_info.value.reason


def test_valid_component(store):
    """Fully specified component passes and yields metadata."""
    ref = store.find_by_identifier("part_ui")

    metadata = check_component(store, ref)

    assert metadata.identifier == "part_ui"
    assert metadata.address == "https://github.com/org/ui"
    assert validate_component(store, ref) is True


def test_missing_component(store):
    """None ref and unknown refs are rejected as not found."""
    assert validate_component(store, None) is False
    assert validate_component(store, 9999) is False
    assert reason_for(store, "nonexistent") == FailureReason.NOT_FOUND


def test_component_without_reusable_tag_rejected(store):
    """Missing reusable tag is rejected even if all other metadata is present."""
    store.add_component("untagged", address="https://github.com/org/untagged", reusable=False)

    assert reason_for(store, "untagged") == FailureReason.NOT_REUSABLE


def test_checks_run_in_order(store):
    """Reusable check runs before the address check."""
    store.add_component("bare", address=None, reusable=False, installation_method=None)

    assert reason_for(store, "bare") == FailureReason.NOT_REUSABLE


def test_missing_address_rejected(store):
    """Component without address link is rejected."""
    store.add_component("no_address", address=None)

    assert reason_for(store, "no_address") == FailureReason.ADDRESS_MISSING


def test_blank_address_rejected(store):
    """Whitespace-only address counts as missing."""
    store.add_component("blank", address="   ")

    assert reason_for(store, "blank") == FailureReason.ADDRESS_MISSING


def test_missing_installation_method_rejected(store):
    """Component without installation method is rejected."""
    store.add_component("no_method", address="https://github.com/org/no-method", installation_method=None)

    assert reason_for(store, "no_method") == FailureReason.INSTALLATION_METHOD_MISSING


def test_address_query_failure_rejected(store):
    """Store failure while reading the address rejects with store_query_failed."""
    store.failing_methods.add("get_address")

    assert reason_for(store, "part_ui") == FailureReason.STORE_QUERY_FAILED


def test_installation_method_query_failure_rejected(store):
    """Store failure while reading the installation method rejects."""
    store.failing_methods.add("get_installation_method")

    assert reason_for(store, "part_ui") == FailureReason.STORE_QUERY_FAILED
    assert validate_component(store, store.find_by_identifier("part_ui")) is False


def test_validation_is_idempotent(store):
    """Validating the same unchanged component twice gives the same answer."""
    store.add_component("untagged", address="https://github.com/org/untagged", reusable=False)

    for identifier in ("part_ui", "untagged"):
        ref = store.find_by_identifier(identifier)
        assert validate_component(store, ref) == validate_component(store, ref)


@pytest.mark.parametrize("method", ["exists", "get_identifier", "has_relation"])
def test_existence_and_tag_query_failures_rejected(store, method):
    """Store failures during the first two checks reject instead of raising."""
    ref = store.find_by_identifier("part_ui")
    store.failing_methods.add(method)

    assert validate_component(store, ref) is False
    with pytest.raises(ComponentValidationError) as exc_info:
        check_component(store, ref)
    assert exc_info.value.reason == FailureReason.STORE_QUERY_FAILED


def test_reusable_class_lookup_failure_rejected(store):
    """Failure looking up the reusable class node rejects the component."""
    ref = store.find_by_identifier("part_ui")
    store.failing_methods.add("find_by_identifier")

    assert validate_component(store, ref) is False
