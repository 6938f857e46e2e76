"""Templating — kida environments, template filters and the default template."""

from lectern.templating.filters import BUILTIN_FILTERS
from lectern.templating.integration import (
    DEFAULT_TEMPLATE_DIR,
    copy_template_files,
    create_environment,
    render_main_document,
)

__all__ = [
    "BUILTIN_FILTERS",
    "DEFAULT_TEMPLATE_DIR",
    "copy_template_files",
    "create_environment",
    "render_main_document",
]
