"""Host scaffolding (rewrite rules, redirect documents) for path routing."""

from lectern.scaffold.generator import ServerScaffoldGenerator, write_scaffold

__all__ = ["ServerScaffoldGenerator", "write_scaffold"]
