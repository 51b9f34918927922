"""pkgdrift — report npm package drift between fetched components and a project."""

__version__ = "0.1.0"
