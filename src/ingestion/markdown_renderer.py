"""
Markdown -> HTML for release notes.

GitHub release notes are GitHub-flavoured Markdown. Python-Markdown's
"extra" bundle covers fenced code, tables and footnotes; "nl2br" turns
single newlines into <br />, which is how GitHub displays release notes.
Output is XHTML so the fragment stays well-formed inside the feed.
"""

from typing import Optional

import markdown

EXTENSIONS = ["extra", "nl2br", "sane_lists"]


class MarkdownRenderer:

    def __init__(self, extensions: Optional[list[str]] = None):
        self.extensions = extensions if extensions is not None else EXTENSIONS

    def render(self, text: str) -> str:
        # markdown.Markdown instances keep state between calls, so build
        # a fresh one per document; workers call this from several threads.
        return markdown.markdown(text, extensions=self.extensions, output_format="xhtml")
