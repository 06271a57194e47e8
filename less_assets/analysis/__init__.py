"""Dependency tracking and staleness decisions."""

from less_assets.analysis.dependency_graph import DependencyResolver
from less_assets.analysis.staleness import StalenessOracle, newest_mtime

__all__ = ["DependencyResolver", "StalenessOracle", "newest_mtime"]
