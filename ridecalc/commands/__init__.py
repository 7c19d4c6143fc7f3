"""Imperative shell: commands that read the store and print with rich."""
