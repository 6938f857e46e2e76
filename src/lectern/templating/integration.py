"""Kida environment setup for the build.

Creates a kida Environment from the build config: the user's template
directory (if any) takes precedence over the bundled default template,
so a template can override single files such as one partial.
"""

import shutil
from pathlib import Path
from typing import Any

from kida import ChoiceLoader, Environment, FileSystemLoader

from lectern.config import BuildConfig
from lectern.templating.filters import BUILTIN_FILTERS

DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates" / "default"


def template_dirs(config: BuildConfig) -> list[Path]:
    """Template directories, highest precedence first."""
    dirs = []
    if config.template_dir is not None:
        dirs.append(Path(config.template_dir))
    dirs.append(DEFAULT_TEMPLATE_DIR)
    return dirs


def create_environment(config: BuildConfig, globals_: dict[str, Any] | None = None) -> Environment:
    """Create the build-time kida Environment.

    Called once per build. The returned environment is not modified after
    the main document has been rendered.
    """
    loader = ChoiceLoader([FileSystemLoader(str(d)) for d in template_dirs(config)])
    env = Environment(
        loader=loader,
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.update_filters(BUILTIN_FILTERS)
    for name, value in (globals_ or {}).items():
        env.add_global(name, value)
    return env


def render_main_document(env: Environment, config: BuildConfig, context: dict[str, Any]) -> str:
    """Render the SPA root document (``index.html`` of the template)."""
    template = env.get_template(config.main_document)
    return template.render(context)


def copy_template_files(config: BuildConfig, dest: Path) -> list[Path]:
    """Copy partials, styles and other template files into the output.

    The main document is rendered, not copied. Files of higher-precedence
    template directories overwrite those of the default template.
    """
    copied: list[Path] = []
    for template_dir in reversed(template_dirs(config)):
        if not template_dir.is_dir():
            continue
        for source in sorted(template_dir.rglob("*")):
            relative = source.relative_to(template_dir)
            if source.is_dir() or relative.as_posix() == config.main_document:
                continue
            target = dest / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source, target)
            copied.append(target)
    return copied
