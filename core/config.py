"""Runtime settings for hexinstall."""

from dataclasses import dataclass
from pathlib import Path

DEFAULT_REGISTRY_URL = "https://hex.pm/api"
DEFAULT_TIMEOUT = 30.0


@dataclass
class Settings:
    """Settings shared by every component that touches the project or network.

    The project directory is always passed explicitly so that components never
    depend on the process working directory.
    """

    project_dir: Path
    registry_url: str = DEFAULT_REGISTRY_URL
    timeout: float = DEFAULT_TIMEOUT
    mix_command: str = "mix"
    manifest_name: str = "mix.exs"

    def __post_init__(self):
        self.project_dir = Path(self.project_dir)

    @property
    def manifest_path(self) -> Path:
        return self.project_dir / self.manifest_name
