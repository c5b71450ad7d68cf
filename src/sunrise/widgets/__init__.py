"""Textual widgets and row rendering."""
