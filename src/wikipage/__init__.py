"""wikipage — front-matter codec and page store for markdown wikis."""

__version__ = "0.1.0"
