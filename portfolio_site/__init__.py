"""Content tooling and static site generator for the Gaston Ibarroule sound design portfolio."""

__version__ = "0.1.0"
