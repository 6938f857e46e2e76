"""Build and routing configuration.

Every config object is a frozen dataclass: immutable after creation,
IDE-autocompletable, no string-key dict lookups. ``BuildConfig`` is
constructed once at the start of a build; ``RoutingConfig`` is also
embedded into the route payload and rebuilt from it at runtime.
"""

import json
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import StrEnum
from pathlib import Path
from typing import Any

from lectern.errors import ConfigurationError


class RoutingMethod(StrEnum):
    """How routes are addressed in the generated SPA.

    ``query``: ``?api=web``, ``?content=guide``.
    ``path``:  ``api/web/``, ``guide/``.
    """

    QUERY = "query"
    PATH = "path"


class ServerType(StrEnum):
    """The host that will serve the generated site.

    Only ``apache`` can rewrite sub-paths to the root document; the
    others serve files as-is and need a redirect page per route.
    """

    APACHE = "apache"
    GITHUB = "github"
    STATIC = "static"
    WINDOWS = "windows"

    @property
    def rewrites(self) -> bool:
        return self is ServerType.APACHE


def ensure_end_slash(value: str) -> str:
    return value if value.endswith("/") else value + "/"


def _enum_value(enum_type: type[StrEnum], value: Any, option: str) -> Any:
    try:
        return enum_type(str(value).lower())
    except ValueError:
        allowed = ", ".join(member.value for member in enum_type)
        msg = f"Invalid {option} {value!r}. Expected one of: {allowed}."
        raise ConfigurationError(msg) from None


@dataclass(frozen=True, slots=True)
class RoutingConfig:
    """Routing configuration shared by the builder and the runtime router.

    Usage::

        routing = RoutingConfig(method=RoutingMethod.PATH, server=ServerType.GITHUB)
    """

    method: RoutingMethod = RoutingMethod.QUERY
    case_sensitive: bool = True
    server: ServerType = ServerType.STATIC
    base: str = "/"
    entrance: str = "api"

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", _enum_value(RoutingMethod, self.method, "routing method"))
        object.__setattr__(self, "server", _enum_value(ServerType, self.server, "server type"))
        object.__setattr__(self, "base", ensure_end_slash(self.base or "/"))

    @property
    def writes_directories(self) -> bool:
        """True when the scaffold will create a directory per route."""
        return self.method is RoutingMethod.PATH and not self.server.rewrites

    @classmethod
    def from_value(
        cls,
        routing: str | Mapping[str, Any] | None,
        *,
        server: str = ServerType.STATIC,
        base: str = "/",
        entrance: str = "api",
    ) -> "RoutingConfig":
        """Build from the ``routing`` option, which is a method name or a mapping."""
        if routing is None:
            routing = {}
        if isinstance(routing, str):
            routing = {"method": routing}
        case_sensitive = routing.get("caseSensitive", routing.get("case_sensitive", True))
        if not isinstance(case_sensitive, bool):
            case_sensitive = True
        return cls(
            method=routing.get("method", RoutingMethod.QUERY),
            case_sensitive=case_sensitive,
            server=server,
            base=base,
            entrance=entrance,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "base": self.base,
            "entrance": self.entrance,
            "server": self.server.value,
            "routing": {"method": self.method.value, "caseSensitive": self.case_sensitive},
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RoutingConfig":
        return cls.from_value(
            data.get("routing"),
            server=data.get("server", ServerType.STATIC),
            base=data.get("base", "/"),
            entrance=data.get("entrance", "api"),
        )


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Settings of the generated application."""

    title: str = ""
    routing: RoutingConfig = field(default_factory=RoutingConfig)
    favicon: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"title": self.title, **self.routing.to_dict()}


@dataclass(frozen=True, slots=True)
class MarkdownOptions:
    """Options passed to the markdown collaborator."""

    gfm: bool = True
    highlight: bool = False
    plugins: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class BuildConfig:
    """A complete build configuration. Immutable after creation.

    ``src`` entries are glob strings (optionally suffixed ``:md``,
    ``:html`` or ``:doc`` to force a parser) or mappings that name a
    group: ``{"web": ["src/web/*.py"], "guide": "README.md"}``.
    """

    src: tuple[str | Mapping[str, Any], ...]
    dest: Path
    app: AppConfig = field(default_factory=AppConfig)
    template_dir: Path | None = None
    main_document: str = "index.html"
    assets: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    markdown: MarkdownOptions = field(default_factory=MarkdownOptions)
    clean: bool = False
    base_dir: Path = field(default_factory=Path.cwd)

    @property
    def routing(self) -> RoutingConfig:
        return self.app.routing

    @classmethod
    def from_mapping(
        cls, data: Mapping[str, Any], *, base_dir: Path | None = None
    ) -> "BuildConfig":
        """Build a config from a parsed ``lectern.json`` mapping.

        Relative paths are resolved against *base_dir* (the directory of
        the config file, or the cwd).
        """
        base_dir = base_dir or Path.cwd()
        src = data.get("src")
        if not src:
            raise ConfigurationError("Source path(s) is not defined or invalid.")
        if isinstance(src, (str, Mapping)):
            src = [src]
        dest = data.get("dest")
        if not dest:
            raise ConfigurationError("Destination directory is not set.")

        app_data = data.get("app") or {}
        routing = RoutingConfig.from_value(
            app_data.get("routing"),
            server=app_data.get("server", ServerType.STATIC),
            base=app_data.get("base", "/"),
            entrance=app_data.get("entrance", "api"),
        )
        app = AppConfig(
            title=app_data.get("title", ""),
            routing=routing,
            favicon=app_data.get("favicon", ""),
        )

        template = data.get("template") or {}
        template_dir = template.get("path") if isinstance(template, Mapping) else template
        markdown = data.get("markdown") or {}
        assets = {
            target: tuple([patterns] if isinstance(patterns, str) else patterns)
            for target, patterns in (data.get("assets") or {}).items()
        }

        return cls(
            src=tuple(src),
            dest=base_dir / dest,
            app=app,
            template_dir=base_dir / template_dir if template_dir else None,
            assets=assets,
            markdown=MarkdownOptions(
                gfm=markdown.get("gfm", True),
                highlight=markdown.get("highlight", False),
                plugins=tuple(markdown.get("plugins", ())),
            ),
            clean=bool(data.get("clean", False)),
            base_dir=base_dir,
        )

    def with_routing(self, **changes: Any) -> "BuildConfig":
        """Return a copy with routing fields replaced (used for CLI overrides)."""
        routing = replace(self.app.routing, **changes)
        return replace(self, app=replace(self.app, routing=routing))


def load_config(path: str | Path) -> BuildConfig:
    """Read a JSON build configuration file."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigurationError(f"Cannot read configuration file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, Mapping):
        raise ConfigurationError(f"Configuration in {path} must be a JSON object.")
    return BuildConfig.from_mapping(data, base_dir=path.parent.resolve())
