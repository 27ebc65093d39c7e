from pathlib import Path
from typing import Dict, Union

import pytest
import yaml


def write_archetype(root: Path, rel: str, manifest: Union[dict, str], files: Dict[str, Union[str, bytes]] = None) -> Path:
    path = root / rel
    path.mkdir(parents=True, exist_ok=True)
    text = manifest if isinstance(manifest, str) else yaml.safe_dump(manifest, sort_keys=False)
    (path / "archetype.yml").write_text(text, encoding="utf-8")
    for name, content in (files or {}).items():
        f = path / name
        f.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            f.write_bytes(content)
        else:
            f.write_bytes(content.encode("utf-8"))
    return path


@pytest.fixture
def make_archetype(tmp_path: Path):
    root = tmp_path / "archetypes"

    def factory(rel: str, manifest: Union[dict, str], files: Dict[str, Union[str, bytes]] = None, root_dir: Path = root) -> Path:
        return write_archetype(root_dir, rel, manifest, files)

    factory.root = root
    return factory
