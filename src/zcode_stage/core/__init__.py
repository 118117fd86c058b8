"""Core configuration, errors and helpers for Z-Code Stage."""
