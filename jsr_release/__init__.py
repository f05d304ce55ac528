"""Release helper for JSR/Deno projects."""

__version__ = "0.1.0"
