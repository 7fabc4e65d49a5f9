"""Render prompt packs as Cursor rules and Claude commands, and manage Promptsfile sources."""

__version__ = "0.1.0"