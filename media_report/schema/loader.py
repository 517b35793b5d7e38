"""Loaders — YAML deck configuration and JSON/YAML report documents.

Deck configuration round-trips through YAML so branding and label
overrides can be reviewed, version-controlled, and edited by hand.
Report and organization records are the backend's JSON documents; YAML
copies are accepted too, chosen by file suffix.
"""

import json
from pathlib import Path

import yaml

from .models import DeckConfig


_YAML_SUFFIXES = {".yaml", ".yml"}


def save_config(config: DeckConfig, path: str | Path) -> None:
    """Serialize a DeckConfig to a YAML file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = config.to_dict()
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False,
                  allow_unicode=True, width=120)


def load_config(path: str | Path) -> DeckConfig:
    """Deserialize a DeckConfig from a YAML file."""
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return DeckConfig.from_dict(data or {})


def load_document(path: str | Path) -> dict:
    """Read a JSON or YAML document that must contain a mapping.

    Raises:
        FileNotFoundError: If *path* does not exist.
        ValueError: If the document is not a mapping.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Document not found: {path}")
    with open(path, encoding="utf-8") as f:
        if path.suffix.lower() in _YAML_SUFFIXES:
            data = yaml.safe_load(f)
        else:
            data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected an object at the top level, "
                         f"got {type(data).__name__}")
    return data


def load_report(path: str | Path) -> dict:
    """Load a report record fetched from the backend."""
    return load_document(path)


def load_organization(path: str | Path) -> dict:
    """Load an organization record (name, alias, logo, gradient colors)."""
    return load_document(path)
