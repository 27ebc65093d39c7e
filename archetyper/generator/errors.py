from __future__ import annotations

from pathlib import Path


class ArchetypeError(RuntimeError):
    """Base class for everything that can abort an instantiation."""


class ConfigError(ArchetypeError):
    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        super().__init__(f"Invalid configuration file {path}: {detail}")


class ArchetypeNotFoundError(ArchetypeError):
    def __init__(self, name: str, searched: list[Path]) -> None:
        self.name = name
        self.searched = searched
        roots = ", ".join(str(p) for p in searched) or "<none>"
        super().__init__(f"Could not find template directory for archetype '{name}' (searched: {roots})")


class ManifestMissingError(ArchetypeError):
    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Archetype manifest not found: {path}")


class ManifestInvalidError(ArchetypeError):
    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Failed to parse {path}: {detail}")


class DestinationExistsError(ArchetypeError):
    def __init__(self, destination: Path) -> None:
        self.destination = destination
        super().__init__(f"Destination '{destination}' already exists")


class ScaffoldIOError(ArchetypeError):
    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        super().__init__(f"I/O error at {path}: {detail}")


class RenderError(ArchetypeError):
    def __init__(self, origin: str, detail: str) -> None:
        self.origin = origin
        self.detail = detail
        super().__init__(f"Failed to render {origin}: {detail}")


class HookEmptyError(ArchetypeError):
    def __init__(self, template: str) -> None:
        self.template = template
        super().__init__(f"Empty command in hooks: {template!r}")


class HookFailedError(ArchetypeError):
    def __init__(self, command: str, exit_status: int | None, detail: str | None = None) -> None:
        self.command = command
        self.exit_status = exit_status
        if exit_status is None:
            msg = f"Failed to execute hook command: {command}"
            if detail:
                msg += f" ({detail})"
        else:
            msg = f"Hook command failed with exit status {exit_status}: {command}"
        super().__init__(msg)
