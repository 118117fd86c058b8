"""Z-Code Stage: moderated tales feed and real-time direct messaging."""

__version__ = "0.1.0"
