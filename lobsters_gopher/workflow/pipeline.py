"""Mirror driver.

Sequences one run:

    INIT -> STORIES_FETCHED -> INDEX_WRITTEN -> ARTICLES_PROCESSING -> DONE

Only a failure to obtain the story list is fatal. Index and article
failures are logged, recorded on the run report and skipped.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from lobsters_gopher.integrations.lobsters_client import fetch_comments, fetch_stories
from lobsters_gopher.models import Story
from lobsters_gopher.output.writer import INDEX_FILENAME, write_output
from lobsters_gopher.rendering.renderer import (
    FormatTemplateRenderer,
    TemplateRenderer,
    render_article,
    render_index,
)
from lobsters_gopher.workflow.error_handling import (
    DecodeError,
    ErrorContext,
    RenderError,
    TransportError,
    WriteError,
)
from lobsters_gopher.workflow.fanout import for_each_story
from lobsters_gopher.workflow.state import MirrorRun, RunStatus

logger = logging.getLogger(__name__)

DEFAULT_WORKER_COUNT = 4


def process_story(story: Story, output_dir: Path | str, renderer: TemplateRenderer) -> Path:
    """Fetch, attach, render and write the comment page of one story.

    Raises:
        TransportError, DecodeError: If the comment thread cannot be fetched
        RenderError: If the page cannot be rendered
        WriteError: If the page cannot be written
    """
    with ErrorContext(f"article {story.id} '{story.title}'") as ctx:
        ctx.add_info("permalink", story.permalink)
        story.attach_comments(fetch_comments(story))
        page = render_article(story, renderer)
        return write_output(output_dir, story.filename, page)


def write_index(
    stories: list[Story],
    output_dir: Path | str,
    now: datetime,
    renderer: TemplateRenderer,
) -> bool:
    """Render and write the gophermap; failures are logged, not raised."""
    try:
        write_output(output_dir, INDEX_FILENAME, render_index(stories, now, renderer))
    except (RenderError, WriteError) as e:
        logger.error(f"Index not written: {e}")
        return False
    return True


def run_mirror(
    base_url: str,
    output_dir: Path | str = ".",
    worker_count: int = DEFAULT_WORKER_COUNT,
    now: Optional[datetime] = None,
    renderer: Optional[TemplateRenderer] = None,
) -> MirrorRun:
    """Run one mirror pass.

    Args:
        base_url: Normalized API base URL
        output_dir: Directory receiving gophermap and <id>.txt files
        worker_count: Number of stories processed concurrently
        now: "Last updated" timestamp, defaults to the current UTC time
        renderer: Template renderer, defaults to FormatTemplateRenderer

    Returns:
        Run report. Status is DONE, or FATAL_ERROR if the story list could
        not be fetched (in which case no files are produced).
    """
    run = MirrorRun(base_url=base_url)
    renderer = renderer if renderer is not None else FormatTemplateRenderer()
    now = now if now is not None else datetime.now(timezone.utc)

    try:
        stories = fetch_stories(base_url)
    except (TransportError, DecodeError) as e:
        logger.error(f"Could not fetch story list: {e}")
        run.status = RunStatus.FATAL_ERROR
        run.error_message = str(e)
        run.finished_at = datetime.now(timezone.utc)
        return run

    run.status = RunStatus.STORIES_FETCHED
    run.story_count = len(stories)

    run.index_written = write_index(stories, output_dir, now, renderer)
    run.status = RunStatus.INDEX_WRITTEN

    def record_failure(story: Story, error: Exception) -> None:
        run.failures[story.id] = str(error)

    run.status = RunStatus.ARTICLES_PROCESSING
    logger.info(f"Processing {len(stories)} stories with {worker_count} workers")
    run.outcomes = for_each_story(
        stories,
        worker_count,
        lambda story: process_story(story, output_dir, renderer),
        on_failure=record_failure,
    )

    run.status = RunStatus.DONE
    run.finished_at = datetime.now(timezone.utc)
    logger.info(
        f"Run complete: {len(run.rendered)} rendered, {len(run.skipped)} skipped, "
        f"index {'written' if run.index_written else 'missing'}"
    )
    return run
