"""Default narrative collaborator: Markdown via patitas.

    from lectern.markdown import MarkdownRenderer

    html = MarkdownRenderer(gfm=False).render("# Guide", origin="guide.md")
"""

from lectern.errors import MarkdownError
from lectern.markdown.renderer import MarkdownRenderer

__all__ = ["MarkdownError", "MarkdownRenderer"]
