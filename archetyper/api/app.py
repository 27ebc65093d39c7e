from pathlib import Path

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel

from .. import __version__
from ..generator.archetype import instantiate
from ..generator.errors import (
    ArchetypeError,
    ArchetypeNotFoundError,
    DestinationExistsError,
    HookEmptyError,
    ManifestInvalidError,
    ManifestMissingError,
    RenderError,
)
from ..generator.locator import list_archetypes
from ..utils.config import Config, load_config

app = FastAPI(title="Archetyper API", version=__version__)


def get_config() -> Config:
    return load_config()


class ProjectReq(BaseModel):
    archetype: str = "app"
    name: str
    out: str | None = None


def _status_for(exc: ArchetypeError) -> int:
    if isinstance(exc, ArchetypeNotFoundError):
        return 404
    if isinstance(exc, DestinationExistsError):
        return 409
    if isinstance(exc, (ManifestMissingError, ManifestInvalidError, RenderError, HookEmptyError)):
        return 422
    return 500


@app.get("/archetypes")
def archetypes(config: Config = Depends(get_config)):
    items = list_archetypes(config.templates.locations)
    return {
        "items": [
            {"name": i.name, "root": str(i.root), "path": str(i.path), "shadowed": i.shadowed}
            for i in items
        ]
    }


@app.post("/projects", status_code=201)
def create_project(req: ProjectReq, config: Config = Depends(get_config)):
    out_dir = Path(req.out or req.name).resolve()
    try:
        # Prompting is impossible over HTTP, so defaults are always used
        archetype = instantiate(req.archetype, req.name, out_dir, True, config)
    except ArchetypeError as exc:
        raise HTTPException(status_code=_status_for(exc), detail=str(exc))
    return {
        "status": "ok",
        "archetype": archetype.name,
        "description": archetype.manifest.description,
        "out": str(out_dir),
    }
