"""Template registry for Gopher pages.

Each template is a static `str.format` string with no logic; conditional
pieces (such as the optional URL segment) are computed by the renderer and
passed in as context values.

Template names:
- index_header: banner and "last updated" stamp of the gophermap
- index_entry: the three lines describing one story in the gophermap
- article_header: banner and title block of a story page
- article_text: submission body of a text post
- comment: one comment block
"""

BANNER = r"""
 .----------------.
| .--------------. |
| |   _____      | |
| |  |_   _|     | |
| |    | |       | |
| |    | |   _   | |
| |   _| |__/ |  | |
| |  |________|  | |
| |              | |
| '--------------' |
 '----------------'
"""

INDEX_HEADER = """{banner}
This is an unofficial Lobste.rs mirror on gopher.
You can find the {story_count} hottest stories and their comments.
Sync happens every 10 minutes or so.

Last updated {updated}

"""

INDEX_ENTRY = """h[{score}] - {title}{link}
Submitted {date} by {user} | {tags}
0View comments ({count})\t{filename}

"""

ARTICLE_HEADER = """{banner}

Viewing comments for "{title}"
{link}
Submitted {date} by {user} | {tags}
---
"""

ARTICLE_TEXT = """{body}
---
"""

COMMENT = """{header}
{body}

"""

TEMPLATES: dict[str, str] = {
    "index_header": INDEX_HEADER,
    "index_entry": INDEX_ENTRY,
    "article_header": ARTICLE_HEADER,
    "article_text": ARTICLE_TEXT,
    "comment": COMMENT,
}
