"""Mint GitHub App installation tokens and print token-embedded git remotes."""

__version__ = "0.1.0"
