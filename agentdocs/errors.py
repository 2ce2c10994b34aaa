"""Exception types raised by agentdocs collaborators."""

from __future__ import annotations


class AgentDocsError(RuntimeError):
    """Base class for errors reported to the user."""


class ValidationError(AgentDocsError, ValueError):
    """Raised when a repository, tag, name, or path argument is rejected."""


class CloneError(AgentDocsError):
    """Raised when the documentation folder cannot be downloaded."""


class ConfigError(AgentDocsError):
    """Raised when the configuration file cannot be parsed."""


__all__ = ["AgentDocsError", "CloneError", "ConfigError", "ValidationError"]
