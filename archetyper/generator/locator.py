"""Resolve archetype names to template directories across the search roots."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Mapping

from .errors import ArchetypeNotFoundError
from .manifest import MANIFEST_FILE

logger = logging.getLogger(__name__)

BUILTIN_ROOT = Path(__file__).resolve().parents[1] / "templates"

BUILTIN_ALIASES = {
    "app": "default/executable",
    "exe": "default/executable",
    "executable": "default/executable",
    "lib": "default/library",
    "library": "default/library",
}


@dataclass(frozen=True)
class ArchetypeListing:
    name: str
    root: Path
    path: Path
    shadowed: bool = False


def search_roots(locations: Iterable[Path]) -> list[Path]:
    """Configured locations in order, then the built-in root."""
    return [Path(p) for p in locations] + [BUILTIN_ROOT]


def candidates(name: str, mappings: Mapping[str, str]) -> list[str]:
    found = []
    mapped = mappings.get(name)
    if mapped:
        found.append(mapped)
    alias = BUILTIN_ALIASES.get(name)
    if alias:
        found.append(alias)
    found.append(name)
    return found


def locate(name: str, locations: Iterable[Path], mappings: Mapping[str, str]) -> Path:
    """Return the first existing ``root / candidate``, trying every candidate
    under one root before moving on to the next root."""
    roots = search_roots(locations)
    rels = candidates(name, mappings)
    for root in roots:
        for rel in rels:
            path = root / rel
            logger.debug("Trying %s", path)
            if path.exists():
                logger.debug("Archetype '%s' resolved to %s", name, path)
                return path.resolve()
    raise ArchetypeNotFoundError(name, roots)


def list_archetypes(locations: Iterable[Path]) -> list[ArchetypeListing]:
    seen: set[str] = set()
    items: list[ArchetypeListing] = []
    for root in search_roots(locations):
        if not root.is_dir():
            continue
        for manifest in sorted(root.rglob(MANIFEST_FILE)):
            path = manifest.parent
            if path == root:
                continue
            name = path.relative_to(root).as_posix()
            items.append(ArchetypeListing(name=name, root=root, path=path, shadowed=name in seen))
            seen.add(name)
    return items
