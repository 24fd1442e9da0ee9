"""Issuebot: slash-command bot for GitHub issue and pull request comments."""

__version__ = "0.1.0"
