"""Tests for the bounded-parallel story fan-out."""

import threading
import time

import pytest

from factories import make_comment, make_story
from lobsters_gopher.workflow.fanout import for_each_story
from lobsters_gopher.workflow.state import StoryOutcome


def test_runs_action_for_every_story():
    stories = [make_story(f"s{i}") for i in range(10)]
    seen = []
    lock = threading.Lock()

    def action(story):
        with lock:
            seen.append(story.id)

    outcomes = for_each_story(stories, 4, action)

    assert sorted(seen) == sorted(s.id for s in stories)
    assert outcomes == {s.id: StoryOutcome.RENDERED for s in stories}


def test_failure_is_isolated():
    stories = [make_story(f"s{i}") for i in range(6)]
    failures = []

    def action(story):
        if story.id == "s3":
            raise RuntimeError("boom")

    outcomes = for_each_story(
        stories, 3, action, on_failure=lambda story, error: failures.append((story.id, str(error)))
    )

    assert outcomes["s3"] == StoryOutcome.SKIPPED
    assert all(outcomes[s.id] == StoryOutcome.RENDERED for s in stories if s.id != "s3")
    assert failures == [("s3", "boom")]


def test_failure_logged_with_title(caplog):
    story = make_story("s1", title="Broken story")

    def action(story):
        raise ValueError("bad payload")

    for_each_story([story], 1, action)

    messages = [r.message for r in caplog.records]
    assert any("Broken story" in m and "bad payload" in m for m in messages)


def test_concurrency_bounded_by_worker_count():
    stories = [make_story(f"s{i}") for i in range(12)]
    active = 0
    peak = 0
    lock = threading.Lock()

    def action(story):
        nonlocal active, peak
        with lock:
            active += 1
            peak = max(peak, active)
        time.sleep(0.02)
        with lock:
            active -= 1

    for_each_story(stories, 3, action)

    assert 1 <= peak <= 3


def test_each_story_handled_by_one_worker():
    """Comments attached in one unit never appear on another story."""
    stories = [make_story(f"s{i}") for i in range(8)]

    def action(story):
        story.attach_comments([make_comment(story.id) for _ in range(3)])

    for_each_story(stories, 4, action)

    for story in stories:
        assert [c.text for c in story.comments] == [story.id] * 3


def test_empty_story_list():
    assert for_each_story([], 4, lambda story: None) == {}


@pytest.mark.parametrize("worker_count", [0, -1])
def test_worker_count_must_be_positive(worker_count):
    with pytest.raises(ValueError, match="worker_count"):
        for_each_story([make_story()], worker_count, lambda story: None)
