"""Build pipeline: source discovery, doc parsing and site output."""

from lectern.build.builder import BuildResult, RoutePlan, SiteBuilder, build, plan_routes
from lectern.build.sources import NarrativeSource, SourceSet, discover

__all__ = [
    "BuildResult",
    "NarrativeSource",
    "RoutePlan",
    "SiteBuilder",
    "SourceSet",
    "build",
    "discover",
    "plan_routes",
]
