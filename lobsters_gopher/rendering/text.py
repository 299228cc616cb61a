"""Plain-text helpers for Gopher output.

Upstream bodies are HTML. Everything written to disk goes through
`cleanup` (bodies) or `to_ascii` (short fields) so the output is plain
ASCII suitable for line-oriented clients.
"""

import re
import textwrap
import unicodedata
from datetime import datetime, timezone

from bs4 import BeautifulSoup

WRAP_WIDTH = 60
MAX_INDENT_DEPTH = 2
DATE_FORMAT = "%a %b {day} %H:%M:%S %Y"

_TAG_RE = re.compile(r"</?[A-Za-z][^<>]*>")
_BLANK_LINES_RE = re.compile(r"\n\s*\n+")

# Characters NFKD leaves untouched but that have an obvious ASCII form
_PUNCTUATION = str.maketrans(
    {
        "‘": "'",
        "’": "'",
        "‚": "'",
        "‛": "'",
        "“": '"',
        "”": '"',
        "„": '"',
        "′": "'",
        "″": '"',
        "–": "-",
        "—": "--",
        "―": "--",
        "−": "-",
        "•": "*",
        "«": "<<",
        "»": ">>",
        "ß": "ss",
        "æ": "ae",
        "Æ": "AE",
        "œ": "oe",
        "Œ": "OE",
        "ø": "o",
        "Ø": "O",
        "ł": "l",
        "Ł": "L",
    }
)


def to_ascii(text: str) -> str:
    """Transliterate text to a printable ASCII approximation."""
    text = text.translate(_PUNCTUATION)
    decomposed = unicodedata.normalize("NFKD", text)
    return decomposed.encode("ascii", "ignore").decode("ascii")


def single_line(text: str) -> str:
    """Transliterate a short field and collapse it onto one line.

    Tabs, line breaks and other control characters would start new
    gophermap fields or menu lines, so they become single spaces.
    """
    text = "".join(ch if ch.isprintable() else " " for ch in to_ascii(text))
    return " ".join(text.split())


def strip_markup(html: str) -> str:
    """Reduce an HTML fragment to text, keeping paragraph breaks."""
    soup = BeautifulSoup(html, "html.parser")
    for br in soup.find_all("br"):
        br.replace_with("\n")
    for block in soup.find_all(["p", "pre", "blockquote", "li"]):
        block.insert_after("\n\n")
    text = soup.get_text()
    # Escaped markup such as "&lt;b&gt;" decodes back into tags
    return _TAG_RE.sub("", text)


def cleanup(html: str) -> str:
    """Sanitize an upstream body into plain ASCII paragraphs.

    Paragraphs are separated by a single blank line; whitespace inside a
    paragraph is collapsed so it can be re-wrapped.
    """
    text = to_ascii(strip_markup(html))
    paragraphs = []
    for paragraph in _BLANK_LINES_RE.split(text):
        collapsed = single_line(paragraph)
        if collapsed:
            paragraphs.append(collapsed)
    return "\n\n".join(paragraphs)


def indent_prefix(level: int) -> str:
    """Tab prefix for a comment at the given nesting level."""
    return "\t" * max(0, min(level, MAX_INDENT_DEPTH))


def wrap_and_indent(text: str, level: int, width: int = WRAP_WIDTH) -> str:
    """Fill each paragraph to `width` columns, then indent it.

    Blank separator lines are left unindented.
    """
    filled = "\n\n".join(
        textwrap.fill(paragraph, width=width, break_on_hyphens=False)
        for paragraph in text.split("\n\n")
    )
    return textwrap.indent(filled, indent_prefix(level))


def format_date(value: datetime) -> str:
    """Format a timestamp in UTC like `Sun Oct 18 09:05:00 2026` (day space-padded).

    Naive datetimes are assumed to already be UTC.
    """
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime(DATE_FORMAT.format(day=f"{value.day:>2}"))
