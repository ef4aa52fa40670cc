"""Core data models for hexinstall."""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class PackageCandidate:
    """A package returned by a registry search."""

    name: str
    latest_version: str
    status: str = "none"  # none, installed, upgrade
    locked_version: str | None = None

    @property
    def is_installed(self) -> bool:
        return self.status == "installed"

    @property
    def is_upgrade(self) -> bool:
        return self.status == "upgrade"


@dataclass
class ManifestUpdate:
    """Report of the edits applied to a mix.exs file."""

    path: Path
    original_content: str
    updated_content: str
    inserted: list[str] = field(default_factory=list)
    upgraded: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        return self.original_content != self.updated_content


@dataclass
class BuildStepResult:
    """Outcome of a single external build command."""

    command: list[str]
    returncode: int | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.returncode == 0
