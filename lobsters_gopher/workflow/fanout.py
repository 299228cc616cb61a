"""Bounded-parallel fan-out over stories.

Each story is an independent unit of work owned by exactly one worker.
A failing unit is logged and marked skipped; it never cancels or blocks
the others.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable

from lobsters_gopher.models import Story
from lobsters_gopher.workflow.state import StoryOutcome

logger = logging.getLogger(__name__)


def for_each_story(
    stories: list[Story],
    worker_count: int,
    action: Callable[[Story], None],
    on_failure: Callable[[Story, Exception], None] | None = None,
) -> dict[str, StoryOutcome]:
    """Run `action` for every story on a fixed-size thread pool.

    Args:
        stories: Stories to process; each is handed to one worker only
        worker_count: Maximum number of stories processed concurrently
        action: Unit of work for one story
        on_failure: Called with the story and exception when a unit fails

    Returns:
        Mapping of story id to outcome, in completion order

    Raises:
        ValueError: If worker_count is not positive
    """
    if worker_count < 1:
        raise ValueError("worker_count must be positive")

    outcomes: dict[str, StoryOutcome] = {}
    if not stories:
        return outcomes

    with ThreadPoolExecutor(max_workers=worker_count) as executor:
        futures = {executor.submit(action, story): story for story in stories}
        for future in as_completed(futures):
            story = futures[future]
            try:
                future.result()
            except Exception as e:
                logger.warning(
                    f"Skipping '{story.title}' ({story.id}): {e}",
                    extra={"story_id": story.id},
                )
                outcomes[story.id] = StoryOutcome.SKIPPED
                if on_failure is not None:
                    on_failure(story, e)
            else:
                outcomes[story.id] = StoryOutcome.RENDERED

    return outcomes
