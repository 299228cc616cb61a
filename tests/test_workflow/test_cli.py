"""Tests for the command line entry point."""

from unittest.mock import patch

import pytest

from lobsters_gopher.cli import main
from lobsters_gopher.workflow.state import MirrorRun, RunStatus, StoryOutcome


def _done_run(base_url: str = "https://lobste.rs/") -> MirrorRun:
    return MirrorRun(
        base_url=base_url,
        status=RunStatus.DONE,
        story_count=2,
        index_written=True,
        outcomes={"a1": StoryOutcome.RENDERED, "b2": StoryOutcome.SKIPPED},
        failures={"b2": "HTTP 503 (https://lobste.rs/s/b2.json)"},
    )


class TestMain:
    """Tests for main()."""

    def test_default_host(self, monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
        monkeypatch.delenv("LOBSTERS_HOST", raising=False)
        monkeypatch.setenv("OUTPUT_DIR", str(tmp_path))
        monkeypatch.setenv("WORKER_COUNT", "2")

        with patch("lobsters_gopher.cli.run_mirror", return_value=_done_run()) as run_mirror:
            assert main([]) == 0

        run_mirror.assert_called_once_with("https://lobste.rs/", output_dir=tmp_path, worker_count=2)

    @pytest.mark.parametrize(
        "host, expected",
        [
            ("example.org", "https://example.org/"),
            ("http://example.org", "https://example.org/"),
            ("https://example.org/", "https://example.org/"),
        ],
    )
    def test_host_flag_normalized(self, host: str, expected: str) -> None:
        with patch("lobsters_gopher.cli.run_mirror", return_value=_done_run(expected)) as run_mirror:
            assert main(["--host", host]) == 0

        assert run_mirror.call_args.args[0] == expected

    def test_skipped_stories_still_exit_zero(self, capsys: pytest.CaptureFixture) -> None:
        with patch("lobsters_gopher.cli.run_mirror", return_value=_done_run()):
            assert main([]) == 0

        out = capsys.readouterr().out
        assert "Articles: 1 rendered, 1 skipped" in out
        assert "b2: HTTP 503" in out

    def test_fatal_run_exits_nonzero(self, capsys: pytest.CaptureFixture) -> None:
        fatal = MirrorRun(
            base_url="https://lobste.rs/",
            status=RunStatus.FATAL_ERROR,
            error_message="HTTP 500 (https://lobste.rs/hottest.json)",
        )

        with patch("lobsters_gopher.cli.run_mirror", return_value=fatal):
            assert main([]) == 1

        assert "Could not fetch the story list" in capsys.readouterr().out

    def test_blank_host_exits_nonzero(self) -> None:
        with patch("lobsters_gopher.cli.run_mirror") as run_mirror:
            assert main(["--host", " "]) == 1

        run_mirror.assert_not_called()

    def test_unknown_flag_rejected(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--pages", "3"])

        assert exc_info.value.code == 2
