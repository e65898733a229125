"""Configuration manager for the Letta CLI: agents, profiles and models."""

__version__ = "0.1.0"
