"""Forum records and the JSON decoder.

Upstream field names are mapped onto shorter attribute names through
validation aliases; records can also be built directly by attribute name.
Fields the mirror does not render are ignored.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    TypeAdapter,
    ValidationError,
    field_validator,
    model_validator,
)

from lobsters_gopher.workflow.error_handling import DecodeError


class _Record(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class User(_Record):
    """Author of a story or comment."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    name: str = Field(validation_alias="username")

    @model_validator(mode="before")
    @classmethod
    def accept_bare_username(cls, data: Any) -> Any:
        """Some API versions send the username string instead of an object."""
        if isinstance(data, str):
            return {"username": data}
        return data


class Comment(_Record):
    """A single comment. Thread position is encoded by `indentation` only."""

    text: str = Field(validation_alias="comment")
    date: datetime = Field(validation_alias="created_at")
    score: int
    indentation: int = Field(validation_alias="indent_level", ge=0)
    user: User = Field(validation_alias="commenting_user")


class Story(_Record):
    """A story from the hottest list.

    Attributes:
        title: Story title
        date: Submission time
        score: Net vote score
        count: Number of comments upstream
        id: Short identifier, used as the article filename stem
        permalink: Discussion page URL
        url: External link, None for text-only submissions
        tags: Tag names in API order
        user: Submitter
        text: Submission body (HTML)
        comments: Comment thread, empty until attached
    """

    title: str
    date: datetime = Field(validation_alias="created_at")
    score: int
    count: int = Field(validation_alias="comment_count", ge=0)
    id: str = Field(validation_alias="short_id")
    permalink: str = Field(validation_alias="short_id_url")
    url: Optional[str] = None
    tags: list[str]
    user: User = Field(validation_alias="submitter_user")
    text: str = Field(validation_alias="description")
    comments: list[Comment] = Field(default_factory=list)

    _comments_attached: bool = PrivateAttr(default=False)

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        """Ensure the id can be used verbatim as a filename stem."""
        if not v or v in (".", ".."):
            raise ValueError("story id must be a non-empty filename stem")
        if any(ch in "/\\" or ch.isspace() or not ch.isprintable() for ch in v):
            raise ValueError(f"story id '{v}' is not filesystem-safe")
        return v

    @field_validator("url")
    @classmethod
    def blank_url_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None

    @property
    def filename(self) -> str:
        """Name of the article file for this story."""
        return f"{self.id}.txt"

    def attach_comments(self, comments: list[Comment]) -> None:
        """Attach the fetched comment thread.

        Raises:
            ValueError: If comments were already attached to this story
        """
        if self._comments_attached:
            raise ValueError(f"comments already attached to story {self.id}")
        self.comments = list(comments)
        self._comments_attached = True


class CommentThread(_Record):
    """Envelope of the per-story comment endpoint.

    The endpoint repeats the story fields; only the comments are kept.
    """

    comments: list[Comment]


_story_list = TypeAdapter(list[Story])


def decode_stories(body: str | bytes, source: Optional[str] = None) -> list[Story]:
    """Decode a hottest-stories payload.

    Args:
        body: Raw JSON array of story objects
        source: URL or label used in error messages

    Returns:
        Stories in payload order, each with an empty comment list

    Raises:
        DecodeError: If the body is not valid JSON or a story is malformed
    """
    try:
        return _story_list.validate_json(body)
    except ValidationError as e:
        raise DecodeError(
            f"Invalid story list: {e.error_count()} error(s): {_first_error(e)}",
            source=source,
        ) from e


def decode_comment_thread(body: str | bytes, source: Optional[str] = None) -> list[Comment]:
    """Decode a comment endpoint payload into its ordered comment list.

    Raises:
        DecodeError: If the body is not valid JSON or a comment is malformed
    """
    try:
        return CommentThread.model_validate_json(body).comments
    except ValidationError as e:
        raise DecodeError(
            f"Invalid comment thread: {e.error_count()} error(s): {_first_error(e)}",
            source=source,
        ) from e


def _first_error(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"]) or "<root>"
    return f"{location}: {first['msg']}"
