"""Gopher page rendering.

`render_index` and `render_article` are pure functions of their inputs.
The current time is passed in explicitly, never read here. Template
expansion goes through the narrow `TemplateRenderer` interface so the page
layout can be swapped without touching the pipeline.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Mapping, Optional

from lobsters_gopher.models import Comment, Story
from lobsters_gopher.rendering.templates import BANNER, TEMPLATES
from lobsters_gopher.rendering.text import (
    cleanup,
    format_date,
    indent_prefix,
    single_line,
    wrap_and_indent,
)
from lobsters_gopher.workflow.error_handling import RenderError


class TemplateRenderer(ABC):
    """Renders a named template with a context mapping."""

    @abstractmethod
    def render(self, template_name: str, context: Mapping[str, Any]) -> str:
        """Render a template.

        Args:
            template_name: Registered template name
            context: Values referenced by the template

        Returns:
            Rendered text

        Raises:
            RenderError: If the template is unknown or cannot be expanded
        """
        raise NotImplementedError


class FormatTemplateRenderer(TemplateRenderer):
    """Renders `str.format` templates from a registry."""

    def __init__(self, templates: Optional[Mapping[str, str]] = None):
        self.templates = dict(TEMPLATES if templates is None else templates)

    def render(self, template_name: str, context: Mapping[str, Any]) -> str:
        try:
            template = self.templates[template_name]
        except KeyError:
            raise RenderError(
                f"Unknown template '{template_name}'", template_name=template_name
            ) from None

        try:
            return template.format_map(context)
        except (KeyError, IndexError, ValueError, AttributeError) as e:
            raise RenderError(
                f"Failed to render '{template_name}': {type(e).__name__}: {e}",
                template_name=template_name,
            ) from e


def _default_renderer(renderer: Optional[TemplateRenderer]) -> TemplateRenderer:
    return renderer if renderer is not None else FormatTemplateRenderer()


def _story_context(story: Story) -> dict[str, Any]:
    return {
        "banner": BANNER,
        "score": story.score,
        "title": single_line(story.title),
        "date": format_date(story.date),
        "user": single_line(story.user.name),
        "tags": ", ".join(single_line(tag) for tag in story.tags),
        "count": story.count,
        "filename": story.filename,
    }


def render_index(
    stories: list[Story],
    now: datetime,
    renderer: Optional[TemplateRenderer] = None,
) -> str:
    """Render the gophermap index.

    Args:
        stories: Stories in display order
        now: Timestamp shown as "Last updated"
        renderer: Template renderer, defaults to FormatTemplateRenderer

    Returns:
        Gophermap text

    Raises:
        RenderError: If a template fails to render
    """
    renderer = _default_renderer(renderer)
    parts = [
        renderer.render(
            "index_header",
            {"banner": BANNER, "story_count": len(stories), "updated": format_date(now)},
        )
    ]
    for story in stories:
        context = _story_context(story)
        context["link"] = f"\tURL:{single_line(story.url)}" if story.url else ""
        parts.append(renderer.render("index_entry", context))
    return "".join(parts)


def render_comment(comment: Comment, renderer: TemplateRenderer) -> str:
    """Render one comment block, indented by its nesting level."""
    header = f"{single_line(comment.user.name)} commented [{comment.score}]"
    return renderer.render(
        "comment",
        {
            "header": indent_prefix(comment.indentation) + header,
            "body": wrap_and_indent(cleanup(comment.text), comment.indentation),
        },
    )


def render_article(story: Story, renderer: Optional[TemplateRenderer] = None) -> str:
    """Render the comment page of a story.

    Comments are rendered in the order they were received.

    Raises:
        RenderError: If a template fails to render
    """
    renderer = _default_renderer(renderer)
    context = _story_context(story)
    context["link"] = single_line(story.url or story.permalink)
    parts = [renderer.render("article_header", context)]

    body = cleanup(story.text)
    if body:
        parts.append(renderer.render("article_text", {"body": wrap_and_indent(body, 0)}))

    parts.extend(render_comment(comment, renderer) for comment in story.comments)
    return "".join(parts)
