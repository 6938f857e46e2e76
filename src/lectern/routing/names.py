"""Route name normalization and validation rules.

Names become query values, URL path segments and (for ``path`` routing
on hosts that cannot rewrite URLs) directory names on disk, so the
accepted character set depends on the routing method and the host.
"""

import re

from lectern.config import RoutingConfig, ServerType
from lectern.errors import NameRule, RouteValidationError
from lectern.routing.route import DEFAULT_API_NAME

# Cannot be "api" or start with "api/": that form addresses the default api group.
RESERVED_NAME = re.compile(r"^api(/|$)", re.IGNORECASE)
INVALID_CHARS = re.compile(r"[#~&^`'\"]")

# "/" is left out: it separates nested route names.
_POSIX_CHARS = re.compile(r"[\\|?*]")
_POSIX_NAMES = re.compile(r"^\.+$")
_POSIX_MAX_LEN = 255

_WINDOWS_CHARS = re.compile(r"[<>:\"\\|?*]")
_WINDOWS_NAMES = re.compile(
    r"^(nul|prn|aux|con|lpt[0-9]|com[0-9]|(clock|keybd|screen|idle|config)\$)(\.|$)",
    re.IGNORECASE,
)
_WINDOWS_MAX_LEN = 260 - 12

_EDGE_DOT_OR_SPACE = re.compile(r"(^[. ]|[. ]$)")


def normalize_name(name: str, *, case_sensitive: bool) -> str:
    """Apply the case policy, trim, and strip one leading/trailing slash."""
    if not case_sensitive:
        name = name.lower()
    name = name.strip()
    return re.sub(r"(^/|/$)", "", name)


def is_safe_path_name(name: str, *, windows: bool) -> bool:
    """Whether *name* can be created as (nested) directories on the host."""
    if not name or not name.strip():
        return False
    chars, names, max_len = (
        (_WINDOWS_CHARS, _WINDOWS_NAMES, _WINDOWS_MAX_LEN)
        if windows
        else (_POSIX_CHARS, _POSIX_NAMES, _POSIX_MAX_LEN)
    )
    if len(name) > max_len:
        return False
    for segment in name.split("/"):
        if not segment or _EDGE_DOT_OR_SPACE.search(segment):
            return False
        if chars.search(segment) or names.search(segment):
            return False
    return True


def validate_name(name: str, routing: RoutingConfig) -> None:
    """Raise ``RouteValidationError`` if *name* (already normalized) is unusable.

    Uniqueness is checked by the table builder, which owns the set of
    registered names.
    """
    if name == DEFAULT_API_NAME:
        return

    if not name:
        raise RouteValidationError(name, NameRule.EMPTY, "Route name cannot be empty.")

    if RESERVED_NAME.search(name):
        msg = (
            f"Route name {name!r} is invalid: \"api\" is a reserved word. "
            "Any ungrouped doc sources are already merged under the default \"api\" route."
        )
        raise RouteValidationError(name, NameRule.RESERVED, msg)

    if INVALID_CHARS.search(name):
        msg = f"Route name {name!r} has invalid characters (any of # ~ & ^ ` ' \")."
        raise RouteValidationError(name, NameRule.INVALID_CHARS, msg)

    if any(segment in (".", "..") for segment in re.split(r"[/\\]", name)):
        msg = f"Route name {name!r} has a relative path segment (\".\" or \"..\")."
        raise RouteValidationError(name, NameRule.UNSAFE_PATH, msg)

    if routing.writes_directories:
        windows = routing.server is ServerType.WINDOWS
        if not is_safe_path_name(name, windows=windows):
            msg = (
                f"Route name {name!r} is not a valid path name for the configured "
                f"server type {routing.server.value!r}."
            )
            raise RouteValidationError(name, NameRule.UNSAFE_PATH, msg)
