"""An archetype loaded into memory, and the ``instantiate`` entry point."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from ..utils.config import Config, load_config
from .engine import TemplateEngine
from .errors import DestinationExistsError, ScaffoldIOError
from .hooks import HookRunner, hook_environment
from .locator import locate
from .manifest import Manifest, parse
from .renderer import TemplateRenderer
from .variables import VariableSource, collect, source_for

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Archetype:
    name: str
    manifest: Manifest
    template_root: Path
    config: Config

    @classmethod
    def load(cls, config: Config, name: str) -> "Archetype":
        template_root = locate(name, config.templates.locations, config.archetypes)
        manifest = parse(template_root)
        logger.debug("Loaded archetype '%s' from %s: %s", name, template_root, manifest.description)
        return cls(name=name, manifest=manifest, template_root=template_root, config=config)

    def instantiate(
        self,
        project_name: str,
        destination: Path,
        use_defaults: bool,
        *,
        source: VariableSource | None = None,
    ) -> None:
        destination = Path(destination)
        if destination.exists():
            raise DestinationExistsError(destination)

        # 1. Collect variables
        context = collect(self.manifest, project_name, source or source_for(use_defaults))

        try:
            destination.mkdir(parents=True)
        except FileExistsError as exc:
            raise DestinationExistsError(destination) from exc
        except OSError as exc:
            raise ScaffoldIOError(destination, str(exc)) from exc

        engine = TemplateEngine()

        # 2. Render the template tree
        logger.info("Rendering template for '%s'...", self.name)
        TemplateRenderer(engine).render(self.template_root, destination, context)

        # 3. Run post-create hooks
        if self.manifest.hooks:
            logger.info("Running post-create hooks...")
            env = hook_environment(self.config.hooks.env, self.config.hooks.path)
            HookRunner(engine, env=env).run(self.manifest.hooks, destination, context)

        logger.info("Project '%s' created successfully at %s", project_name, destination)


def instantiate(
    archetype_name: str,
    project_name: str,
    destination: Path,
    use_defaults: bool,
    config: Config | None = None,
    *,
    source: VariableSource | None = None,
) -> Archetype:
    archetype = Archetype.load(config if config is not None else load_config(), archetype_name)
    archetype.instantiate(project_name, destination, use_defaults, source=source)
    return archetype
