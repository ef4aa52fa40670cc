"""Classification and ranking of search results against locked dependencies."""

from dataclasses import replace

from packaging.version import InvalidVersion, Version

from .models import PackageCandidate


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance with unit cost for insert, delete and substitute."""
    if len(a) < len(b):
        a, b = b, a

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            if char_a == char_b:
                current.append(previous[j - 1])
            else:
                current.append(1 + min(previous[j - 1], previous[j], current[j - 1]))
        previous = current

    return previous[-1]


def relevance(name: str, query: str) -> float:
    """Similarity of a package name to the search query; 1.0 means identical."""
    longest = max(len(name), len(query))
    if longest == 0:
        return 1.0
    return 1 - edit_distance(name.lower(), query.lower()) / longest


def classify(candidates: list[PackageCandidate], locks: dict[str, str]) -> list[PackageCandidate]:
    """Annotate candidates with their status relative to the locked versions.

    Args:
        candidates: Search results in registry order
        locks: Mapping of package name to locked version

    Returns:
        New candidates with status and locked_version set
    """
    classified = []
    for candidate in candidates:
        locked = locks.get(candidate.name)
        if not locked:
            classified.append(replace(candidate, status="none", locked_version=None))
        elif locked == candidate.latest_version:
            classified.append(replace(candidate, status="installed", locked_version=locked))
        else:
            classified.append(replace(candidate, status="upgrade", locked_version=locked))
    return classified


def rank(candidates: list[PackageCandidate], query: str) -> list[PackageCandidate]:
    """Sort by relevance to the query, best first, then by name."""
    return sorted(candidates, key=lambda c: (-relevance(c.name, query), c.name))


def order_candidates(candidates: list[PackageCandidate], query: str) -> list[PackageCandidate]:
    """Presentation order: installed, then upgrades, then ranked installables."""
    installed = [c for c in candidates if c.status == "installed"]
    upgrades = [c for c in candidates if c.status == "upgrade"]
    installable = [c for c in candidates if c.status == "none"]
    return installed + upgrades + rank(installable, query)


def semver_delta(old_version: str | None, new_version: str) -> str:
    """Size of the jump between two versions.

    Returns:
        "major", "minor", "patch", or "unknown"
    """
    if not old_version:
        return "unknown"

    try:
        old_ver = Version(old_version)
        new_ver = Version(new_version)
    except InvalidVersion:
        return "unknown"

    if new_ver <= old_ver:
        return "unknown"
    if new_ver.major != old_ver.major:
        return "major"
    if new_ver.minor != old_ver.minor:
        return "minor"
    if new_ver.micro != old_ver.micro:
        return "patch"
    return "unknown"
