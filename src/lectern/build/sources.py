"""Source discovery: expand ``src`` entries and sort files by parser.

Doc sources (``.py``) are collected into named groups; each group
becomes one api route. Narrative sources (``.md``, ``.html``) become one
content route each. A trailing ``:md``, ``:html`` or ``:doc`` on a
glob forces the parser, e.g. ``"LICENSE:md"``.
"""

import glob
import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from lectern.errors import ConfigurationError
from lectern.routing.route import DEFAULT_API_NAME, SourceType

logger = logging.getLogger("lectern.build")

_FORCED_PARSER = re.compile(r"^(.*):([a-z]+)$", re.IGNORECASE)

PARSER_TYPES: dict[str, SourceType] = {
    "py": SourceType.DOC,
    "doc": SourceType.DOC,
    "md": SourceType.TEXT,
    "markdown": SourceType.TEXT,
    "html": SourceType.MARKUP,
    "htm": SourceType.MARKUP,
}


@dataclass(frozen=True, slots=True)
class ParseInfo:
    src_path: str
    source_type: SourceType | None
    forced: bool = False


@dataclass(frozen=True, slots=True)
class NarrativeSource:
    """A markdown or HTML file that becomes one content route."""

    name: str
    path: Path
    source_type: SourceType


@dataclass(slots=True)
class SourceSet:
    """Discovered sources, in discovery order."""

    doc_groups: dict[str, list[Path]] = field(default_factory=lambda: {DEFAULT_API_NAME: []})
    narratives: list[NarrativeSource] = field(default_factory=list)

    @property
    def doc_file_count(self) -> int:
        return sum(len(files) for files in self.doc_groups.values())


def parse_info(src: str) -> ParseInfo:
    """Split an optional forced-parser suffix off a source glob."""
    m = _FORCED_PARSER.match(src)
    if m and m.group(2).lower() in PARSER_TYPES:
        return ParseInfo(m.group(1), PARSER_TYPES[m.group(2).lower()], forced=True)
    ext = Path(src).suffix.lower().lstrip(".")
    return ParseInfo(src, PARSER_TYPES.get(ext))


def expand(pattern: str, base_dir: Path) -> list[Path]:
    """Expand a glob relative to *base_dir* into existing files, sorted."""
    full = pattern if Path(pattern).is_absolute() else str(base_dir / pattern)
    return sorted(Path(p).resolve() for p in glob.glob(full, recursive=True) if Path(p).is_file())


def _patterns(value: Any, key: str) -> list[str]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, Iterable) and all(isinstance(v, str) for v in value):
        return list(value)
    raise ConfigurationError(f"Invalid source definition for {key!r}: expected a path or a list of paths.")


def discover(entries: Iterable[str | Mapping[str, Any]], base_dir: Path) -> SourceSet:
    """Expand every ``src`` entry into a ``SourceSet``.

    The same file listed twice is queued once. Two *different* files that
    end up with the same route name are left for the route table builder
    to reject.
    """
    sources = SourceSet()
    seen_narratives: set[Path] = set()

    def pick(src: str, name: str | None) -> None:
        info = parse_info(src)
        into = f' into "{name}"' if name else ""
        logger.info("Expanding: %s%s", src, into)
        files = expand(info.src_path, base_dir)
        if not files:
            logger.warning(" » No files matched: %s", src)
        for file_path in files:
            source_type = info.source_type
            if not info.forced:
                source_type = PARSER_TYPES.get(file_path.suffix.lower().lstrip("."))
            elif source_type is not None:
                logger.warning(" » %s parser will be forced on: %s", source_type.value, file_path)

            if source_type is SourceType.DOC:
                group = sources.doc_groups.setdefault(name or DEFAULT_API_NAME, [])
                if file_path in group:
                    logger.warning(" » Duplicate ignored: %s", file_path)
                    continue
                logger.debug("Queued: %s", file_path)
                group.append(file_path)
            elif source_type in (SourceType.TEXT, SourceType.MARKUP):
                if file_path in seen_narratives:
                    logger.warning(" » Duplicate ignored: %s", file_path)
                    continue
                seen_narratives.add(file_path)
                # Names derived from file names are lower-cased: README.md -> "readme".
                unit_name = name or file_path.stem.lower()
                logger.debug("Queued (%s): %s", unit_name, file_path)
                sources.narratives.append(NarrativeSource(unit_name, file_path, source_type))
            else:
                logger.warning(" » Unsupported source ignored: %s", file_path)

    for entry in entries:
        if isinstance(entry, str):
            pick(entry, None)
        elif isinstance(entry, Mapping):
            for key, value in entry.items():
                for pattern in _patterns(value, key):
                    pick(pattern, key)
        else:
            raise ConfigurationError(f"Invalid source entry: {entry!r}")
    return sources
