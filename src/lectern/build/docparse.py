"""Default doc-comment collaborator: docstrings of Python modules.

Produces, per api group, a flat list of symbol records plus the sorted
symbol names. The route model never looks inside these records; they
are handed to the api partial as-is.
"""

import ast
from pathlib import Path
from typing import Any

from lectern.errors import BuildError
from lectern.routing.schema import ApiDocs

_FUNCTION_NODES = (ast.FunctionDef, ast.AsyncFunctionDef)


def _signature(node: ast.FunctionDef | ast.AsyncFunctionDef) -> str:
    returns = f" -> {ast.unparse(node.returns)}" if node.returns else ""
    return f"({ast.unparse(node.args)}){returns}"


def _record(kind: str, longname: str, node: ast.AST, doc: str, file: Path) -> dict[str, Any]:
    record: dict[str, Any] = {
        "kind": kind,
        "name": longname.rsplit(".", 1)[-1],
        "longname": longname,
        "description": doc,
        "file": file.name,
        "line": getattr(node, "lineno", 1),
        "signature": "",
    }
    if isinstance(node, _FUNCTION_NODES):
        record["signature"] = _signature(node)
        if isinstance(node, ast.AsyncFunctionDef):
            record["async"] = True
    return record


def _walk(body: list[ast.stmt], prefix: str, file: Path, out: list[dict[str, Any]]) -> None:
    for node in body:
        if not isinstance(node, (ast.ClassDef, *_FUNCTION_NODES)):
            continue
        if node.name.startswith("_"):
            continue
        longname = f"{prefix}.{node.name}"
        doc = ast.get_docstring(node)
        if isinstance(node, ast.ClassDef):
            if doc:
                out.append(_record("class", longname, node, doc, file))
            _walk(node.body, longname, file, out)
        elif doc:
            kind = "method" if "." in prefix else "function"
            out.append(_record(kind, longname, node, doc, file))


def parse_module(path: Path) -> list[dict[str, Any]]:
    """Extract documented public symbols from one Python file."""
    try:
        source = path.read_text(encoding="utf-8")
        tree = ast.parse(source, filename=str(path))
    except (OSError, UnicodeDecodeError, SyntaxError) as exc:
        raise BuildError(f"Could not parse doc source {path}: {exc}") from exc

    module = path.stem
    records: list[dict[str, Any]] = []
    doc = ast.get_docstring(tree)
    if doc:
        records.append(_record("module", module, tree, doc, path))
    _walk(tree.body, module, path, records)
    return records


def parse_group(files: list[Path]) -> ApiDocs:
    documentation: list[dict[str, Any]] = []
    for path in files:
        documentation.extend(parse_module(path))
    symbols = sorted({record["longname"] for record in documentation})
    return ApiDocs(documentation=documentation, symbols=symbols)
