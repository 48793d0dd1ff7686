"""coursegraph - Content graph and prerequisite resolution for a tutorial site."""

__version__ = "0.1.0"
