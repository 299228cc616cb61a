"""Tests for the run report model."""

import json

from lobsters_gopher.workflow.state import MirrorRun, RunStatus, StoryOutcome


def test_new_run_starts_in_init():
    run = MirrorRun(base_url="https://lobste.rs/")

    assert run.status == RunStatus.INIT
    assert run.outcomes == {}
    assert run.finished_at is None
    assert not run.succeeded


def test_rendered_and_skipped_views():
    run = MirrorRun(
        base_url="https://lobste.rs/",
        status=RunStatus.DONE,
        outcomes={"a": StoryOutcome.RENDERED, "b": StoryOutcome.SKIPPED, "c": StoryOutcome.RENDERED},
    )

    assert run.rendered == ["a", "c"]
    assert run.skipped == ["b"]
    assert run.succeeded


def test_json_serialization():
    run = MirrorRun(base_url="https://lobste.rs/", outcomes={"a": StoryOutcome.SKIPPED})

    data = json.loads(run.model_dump_json())

    assert data["status"] == "init"
    assert data["outcomes"] == {"a": "skipped"}
    assert data["finished_at"] is None
    assert isinstance(data["started_at"], str)
