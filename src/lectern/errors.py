"""Lectern exception hierarchy.

Shared across the route builder, scaffold writer, build pipeline and
runtime router so every module raises and catches the same types.
"""

from enum import StrEnum


class LecternError(Exception):
    """Base for all lectern-specific errors."""


class ConfigurationError(LecternError):
    """Raised when build or routing configuration is invalid.

    Always fatal: the build stops before anything is written.
    """


class NameRule(StrEnum):
    """The route-name rule a ``RouteValidationError`` reports."""

    EMPTY = "empty"
    RESERVED = "reserved"
    INVALID_CHARS = "invalid-chars"
    UNSAFE_PATH = "unsafe-path"
    DUPLICATE = "duplicate"


class RouteValidationError(ConfigurationError):
    """A route name broke one of the route table invariants.

    Carries the offending (normalized) name and the violated rule so
    callers can report both without parsing the message.
    """

    def __init__(self, name: str, rule: NameRule, message: str) -> None:
        super().__init__(message)
        self.name = name
        self.rule = rule


class ScaffoldError(LecternError):
    """Writing host scaffolding (redirect pages, rewrite rules) failed."""


class BuildError(LecternError):
    """A build step failed for a reason other than configuration."""


class MarkdownError(LecternError):
    """A narrative Markdown source could not be converted to HTML."""


class SchemaVersionError(LecternError):
    """The embedded route payload was produced by an incompatible builder."""

    def __init__(self, found: object, expected: int) -> None:
        super().__init__(
            f"Unsupported route payload schema {found!r}; this runtime reads schema {expected}."
        )
        self.found = found
        self.expected = expected


class RouteNotFound(LecternError):  # noqa: N818
    """A not-found route was rendered with no callback to report it to."""
