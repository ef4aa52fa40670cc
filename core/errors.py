"""Exceptions raised by hexinstall."""


class HexInstallError(Exception):
    """Base class for hexinstall errors."""


class RegistryUnavailable(HexInstallError):
    """The package registry could not be queried or returned an unusable payload."""


class ManifestNotFound(HexInstallError):
    """The mix.exs file does not exist in the project directory."""

    def __init__(self, path):
        super().__init__(f"File {path} not found")
        self.path = path


class DependencyNotFound(HexInstallError):
    """An edit target for a package could not be located in mix.exs."""

    def __init__(self, name: str):
        super().__init__(f"Could not find a dependency entry for {name} in mix.exs")
        self.name = name
