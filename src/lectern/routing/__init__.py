"""Routing — route table construction, location resolution and matching.

Routes are registered during the build and frozen into an immutable
table that is embedded into the generated SPA and read back at runtime.
"""
