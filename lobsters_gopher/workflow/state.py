"""Run state definitions.

This module defines the data structures for tracking a mirror run without
implementing any execution logic.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, Field, field_serializer


class RunStatus(str, Enum):
    """Mirror run status.

    Attributes:
        INIT: Run created, nothing fetched yet
        STORIES_FETCHED: Story list fetched and decoded
        INDEX_WRITTEN: Index step finished (written or failed and logged)
        ARTICLES_PROCESSING: Per-story work dispatched to the worker pool
        DONE: Every story is rendered or skipped
        FATAL_ERROR: Story list could not be obtained
    """

    INIT = "init"
    STORIES_FETCHED = "stories_fetched"
    INDEX_WRITTEN = "index_written"
    ARTICLES_PROCESSING = "articles_processing"
    DONE = "done"
    FATAL_ERROR = "fatal_error"


class StoryOutcome(str, Enum):
    """Final state of one story's unit of work."""

    RENDERED = "rendered"
    SKIPPED = "skipped"


class MirrorRun(BaseModel):
    """Report of a single mirror run.

    Attributes:
        base_url: Normalized API base URL
        status: Current run status
        story_count: Number of stories in the fetched list
        index_written: Whether the gophermap was written
        outcomes: Story id to outcome
        failures: Story id to error message, for skipped stories
        error_message: Fatal error details if status is FATAL_ERROR
        started_at: When the run started (UTC)
        finished_at: When the run reached DONE or FATAL_ERROR (UTC)
    """

    base_url: str
    status: RunStatus = RunStatus.INIT
    story_count: int = 0
    index_written: bool = False
    outcomes: Dict[str, StoryOutcome] = Field(default_factory=dict)
    failures: Dict[str, str] = Field(default_factory=dict)
    error_message: Optional[str] = None
    started_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    finished_at: Optional[datetime] = None

    @property
    def rendered(self) -> list[str]:
        return [sid for sid, outcome in self.outcomes.items() if outcome == StoryOutcome.RENDERED]

    @property
    def skipped(self) -> list[str]:
        return [sid for sid, outcome in self.outcomes.items() if outcome == StoryOutcome.SKIPPED]

    @property
    def succeeded(self) -> bool:
        """True unless the story list could not be fetched."""
        return self.status == RunStatus.DONE

    @field_serializer("started_at", "finished_at", when_used="json")
    def serialize_datetime(self, value: Optional[datetime]) -> Optional[str]:
        """Serialize datetime fields to ISO format strings."""
        return value.isoformat() if value is not None else None
