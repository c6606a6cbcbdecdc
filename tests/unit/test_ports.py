"""Tests for port interfaces."""

import io

import pytest

from teamcity_bdd.core.models import LifecycleEvent
from teamcity_bdd.core.ports import BoundaryListener, LifecycleListener, WritableStream

pytestmark = [pytest.mark.core, pytest.mark.tier(0)]


class TestLifecycleListener:
    """Tests for LifecycleListener protocol."""

    def test_protocol_has_handle_method(self) -> None:
        """LifecycleListener must define handle(event) -> None."""
        assert hasattr(LifecycleListener, "handle")

    def test_class_implementing_protocol_is_recognized(self) -> None:
        """A class with a handle method should satisfy LifecycleListener."""

        class FakeListener:
            def handle(self, event: LifecycleEvent) -> None:
                pass

        listener: LifecycleListener = FakeListener()
        assert isinstance(listener, LifecycleListener)


class TestWritableStream:
    """Tests for WritableStream protocol."""

    def test_text_streams_are_recognized(self) -> None:
        """In-memory text streams satisfy WritableStream."""
        assert isinstance(io.StringIO(), WritableStream)

    def test_object_without_flush_is_rejected(self) -> None:
        """Objects missing flush() are not streams."""

        class WriteOnly:
            def write(self, text: str) -> int:
                return len(text)

        assert not isinstance(WriteOnly(), WritableStream)


class TestBoundaryListener:
    """Tests for BoundaryListener protocol."""

    @pytest.mark.parametrize(
        "method",
        ["feature_started", "feature_finished", "scenario_started", "scenario_finished"],
    )
    def test_protocol_has_transition_methods(self, method: str) -> None:
        """BoundaryListener defines one method per transition."""
        assert hasattr(BoundaryListener, method)
