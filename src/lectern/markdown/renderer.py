"""Narrative Markdown to HTML fragments.

Each ``.md`` source becomes one ``content/{name}.html`` fragment that the
runtime router fetches and hands to the content partial.
"""

import re

from patitas import Markdown

from lectern.errors import MarkdownError

# GitHub draws a rule under h1/h2; "gfm" output imitates it.
_H1_H2_CLOSE = re.compile(r"(</h[12]>)")


class MarkdownRenderer:
    """Converts narrative sources with one reusable ``patitas.Markdown``.

    ``plugins`` defaults to every patitas plugin (tables, task lists,
    footnotes and the rest). ``highlight`` turns on code highlighting in
    fenced blocks.
    """

    __slots__ = ("_gfm", "_md")

    def __init__(
        self,
        *,
        plugins: list[str] | None = None,
        highlight: bool = False,
        gfm: bool = True,
    ) -> None:
        self._md = Markdown(plugins=plugins or ["all"], highlight=highlight)
        self._gfm = gfm

    def render(self, source: str, *, origin: str = "<string>") -> str:
        """Return the HTML fragment for *source*.

        Raises ``MarkdownError`` naming *origin* when patitas fails.
        """
        if not source.strip():
            return ""
        try:
            html = self._md(source)
        except Exception as exc:
            raise MarkdownError(f"Could not convert {origin} to HTML: {exc}") from exc
        if self._gfm:
            html = _H1_H2_CLOSE.sub(r"\1\n<hr />", html)
        return html
