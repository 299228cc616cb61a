"""Gopher page rendering."""

from lobsters_gopher.rendering.renderer import (
    FormatTemplateRenderer,
    TemplateRenderer,
    render_article,
    render_index,
)

__all__ = [
    "FormatTemplateRenderer",
    "TemplateRenderer",
    "render_article",
    "render_index",
]
