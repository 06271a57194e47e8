"""less-assets: LESS to CSS compile pipeline with @import dependency tracking."""

__version__ = "1.0.0"
