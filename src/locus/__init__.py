"""Locus - source positions and symbol signatures for Java code analysis."""

try:
    from importlib.metadata import version

    __version__ = version("locus")
except Exception:
    __version__ = "0.0.0.dev0+local"  # Fallback for development
