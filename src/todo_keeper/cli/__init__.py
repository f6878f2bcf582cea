"""Command surface, composition root and the console entrypoint."""
