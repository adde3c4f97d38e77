"""Domain-Oriented Observability for the access infrastructure layer."""

from access.infrastructure.observability.directory_probe import (
    DefaultGithubDirectoryProbe,
    GithubDirectoryProbe,
)

__all__ = [
    "DefaultGithubDirectoryProbe",
    "GithubDirectoryProbe",
]
