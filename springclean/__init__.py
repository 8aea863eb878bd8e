"""git-springclean: find git repositories that need attention before cleanup."""

__version__ = "0.3.0"
