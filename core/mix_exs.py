"""Minimal-diff edits of mix.exs dependency declarations."""

import logging
import re
from pathlib import Path

from .errors import ManifestNotFound
from .models import ManifestUpdate, PackageCandidate

logger = logging.getLogger(__name__)

DEPS_BLOCK_PATTERN = re.compile(r"defp deps(?:\(\))? do\s*\[(?P<indent>\s*)")
RANGE_OPERATORS = r"(?:~>|>=|<=|==|>|<)"


def _dependency_pattern(name: str) -> re.Pattern:
    return re.compile(
        r"\{:" + re.escape(name) + r",\s*\"(?P<operator>" + RANGE_OPERATORS + r"\s*)?(?P<version>[^\"]+)\""
    )


class MixExsEditor:
    """Text editor for the deps list of a mix.exs file.

    Edits are targeted substring replacements; everything outside the touched
    tuples is preserved byte for byte.
    """

    def __init__(self, text: str):
        self.text = text

    def locate(self, name: str) -> re.Match | None:
        """Find the first `{:name, "version"` tuple for a package."""
        return _dependency_pattern(name).search(self.text)

    def upgrade(self, name: str, version: str) -> bool:
        """Replace the version of an existing dependency, keeping any range operator."""
        match = self.locate(name)
        if not match:
            return False

        start, end = match.span("version")
        self.text = self.text[:start] + version + self.text[end:]
        return True

    def insert(self, name: str, version: str) -> bool:
        """Add `{:name, "~> version"}` as the first entry of the deps list."""
        match = DEPS_BLOCK_PATTERN.search(self.text)
        if not match:
            return False

        whitespace = match.group("indent")
        if "\n" in whitespace:
            newline = "\r\n" if "\r\n" in whitespace else "\n"
            separator = newline + whitespace.rsplit("\n", 1)[1]
        else:
            separator = " "

        new_dep = f'{{:{name}, "~> {version}"}},{separator}'
        position = match.end()
        self.text = self.text[:position] + new_dep + self.text[position:]
        return True


def apply_selection(
    manifest_path: Path, packages: list[PackageCandidate], write: bool = True
) -> ManifestUpdate:
    """Apply selected installs and upgrades to a mix.exs file.

    Args:
        manifest_path: Path to mix.exs
        packages: Selected candidates, in selection order
        write: Persist the result; False leaves the file untouched

    Returns:
        Report of the edits, including packages whose target was not found
    """
    manifest_path = Path(manifest_path)
    if not manifest_path.is_file():
        raise ManifestNotFound(manifest_path)

    with manifest_path.open(encoding="utf-8", newline="") as f:
        original = f.read()
    editor = MixExsEditor(original)
    update = ManifestUpdate(path=manifest_path, original_content=original, updated_content=original)

    for pkg in packages:
        if pkg.status == "upgrade":
            if editor.upgrade(pkg.name, pkg.latest_version):
                update.upgraded.append(pkg.name)
            else:
                logger.debug("No dependency tuple for %s in %s", pkg.name, manifest_path)
                update.missing.append(pkg.name)
        elif pkg.status == "none":
            if editor.insert(pkg.name, pkg.latest_version):
                update.inserted.append(pkg.name)
            else:
                logger.debug("No deps list found in %s", manifest_path)
                update.missing.append(pkg.name)

    update.updated_content = editor.text

    if write and update.has_changes:
        manifest_path.write_text(update.updated_content, encoding="utf-8", newline="")
        logger.debug("Wrote %s", manifest_path)

    return update
