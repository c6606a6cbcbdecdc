"""Tests for the failure registry."""

import pytest

from teamcity_bdd.core.failures import FailureRecord, FailureRegistry

pytestmark = [pytest.mark.core, pytest.mark.tier(0)]


class TestFailureRegistry:
    """Tests for FailureRegistry.record_failure()."""

    @pytest.mark.tra("Failures.Record")
    def test_first_failure_is_recorded(self) -> None:
        """The first failure for a key is recorded and escaped."""
        registry = FailureRegistry()

        recorded = registry.record_failure(("Login", '"ok"'), "it's", "a\nb")

        assert recorded is True
        assert registry.get(("Login", '"ok"')) == FailureRecord(message="it|'s", details="a|nb")

    @pytest.mark.tra("Failures.Dedup")
    def test_second_failure_for_same_key_is_absorbed(self) -> None:
        """Only the first failure per key is kept."""
        registry = FailureRegistry()
        registry.record_failure("key", "first")

        recorded = registry.record_failure("key", "second")

        assert recorded is False
        assert registry.get("key") == FailureRecord(message="first", details="")
        assert len(registry) == 1

    def test_different_keys_are_independent(self) -> None:
        """Failures for different keys are all recorded."""
        registry = FailureRegistry()

        assert registry.record_failure(("A", '"s"'), "x")
        assert registry.record_failure(("B", '"s"'), "y")
        assert len(registry) == 2

    def test_missing_key(self) -> None:
        """Unknown keys are reported as not recorded."""
        registry = FailureRegistry()

        assert registry.is_recorded("nope") is False
        assert registry.get("nope") is None

    def test_none_key_is_supported(self) -> None:
        """Failures outside any scenario are still deduplicated."""
        registry = FailureRegistry()

        assert registry.record_failure((None, None), "x")
        assert not registry.record_failure((None, None), "y")
        assert registry.is_recorded((None, None))
