"""YAML configuration loader with validation."""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Any

import yaml

from clusterwipe.core.tags import DEFAULT_CLUSTER_ID_TAG_KEY


@dataclass
class Config:
    """clusterwipe configuration."""
    cluster_id: Optional[str] = None
    tags: Dict[str, str] = field(default_factory=dict)
    cluster_id_tag_key: str = DEFAULT_CLUSTER_ID_TAG_KEY
    region: Optional[str] = None
    dry_run: bool = True
    json_logs: bool = False
    verbosity: int = 0


def load_config(path: Optional[str] = None) -> Config:
    """Load config from YAML file or return defaults.

    Args:
        path: Path to YAML config file. If None, returns default config.

    Returns:
        Config instance

    Raises:
        FileNotFoundError: If specified path doesn't exist
        yaml.YAMLError: If YAML is invalid
        ValueError: If ``tags`` is not a mapping
    """
    if path is None:
        return Config()

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    return _parse_config(data)


def _parse_config(data: Dict[str, Any]) -> Config:
    """Parse config dict into Config dataclass."""
    tags = data.get("tags") or {}
    if not isinstance(tags, dict):
        raise ValueError(f"'tags' must be a mapping, got {type(tags).__name__}")

    cluster_id = data.get("cluster_id")
    return Config(
        cluster_id=str(cluster_id) if cluster_id is not None else None,
        # YAML turns `custodian: true` into a bool; tags are always strings
        tags={str(k): _tag_value(v) for k, v in tags.items()},
        cluster_id_tag_key=data.get("cluster_id_tag_key", DEFAULT_CLUSTER_ID_TAG_KEY),
        region=data.get("region"),
        dry_run=data.get("dry_run", True),
        json_logs=data.get("json_logs", False),
        verbosity=data.get("verbosity", 0),
    )


def _tag_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
