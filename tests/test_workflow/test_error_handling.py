"""Tests for the error taxonomy and ErrorContext."""

import logging

import pytest

from lobsters_gopher.workflow.error_handling import (
    DecodeError,
    ErrorContext,
    MirrorError,
    RenderError,
    TransportError,
    WriteError,
)


class TestCustomExceptions:
    """Tests for custom exception classes."""

    def test_mirror_error_with_context(self):
        error = MirrorError("Test error", story_id="abc1")

        assert str(error) == "Test error"
        assert error.context["story_id"] == "abc1"
        assert error.timestamp > 0

    def test_transport_error(self):
        error = TransportError("HTTP 502", url="https://lobste.rs/hottest.json", status_code=502)

        assert str(error) == "HTTP 502 (https://lobste.rs/hottest.json)"
        assert error.status_code == 502

    def test_decode_error(self):
        error = DecodeError("bad json", source="https://lobste.rs/s/x.json")

        assert error.source == "https://lobste.rs/s/x.json"

    @pytest.mark.parametrize(
        "error",
        [
            TransportError("t", url="u"),
            DecodeError("d"),
            RenderError("r", template_name="comment"),
            WriteError("w", path="/tmp/x"),
        ],
    )
    def test_all_errors_share_base(self, error):
        assert isinstance(error, MirrorError)


class TestErrorContext:
    """Tests for ErrorContext."""

    def test_success_logs_debug(self, caplog):
        caplog.set_level(logging.DEBUG)

        with ErrorContext("article abc1") as ctx:
            ctx.add_info("title", "Test")

        assert ctx.info == {"title": "Test"}
        assert any("completed successfully" in r.message for r in caplog.records)

    def test_failure_is_traced_and_reraised(self, caplog):
        """The caller reports the failure; the context only traces it."""
        caplog.set_level(logging.DEBUG)

        with pytest.raises(TransportError):
            with ErrorContext("article abc1 'Test'"):
                raise TransportError("HTTP 500", url="https://lobste.rs/s/abc1.json")

        assert not [r for r in caplog.records if r.levelno >= logging.WARNING]
        traced = [r for r in caplog.records if "failed after" in r.message]
        assert len(traced) == 1
        assert "article abc1 'Test'" in traced[0].message
        assert "HTTP 500" in traced[0].message
