"""YAML config loading with env var expansion."""

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from treeprune.errors import ConfigError

from .models import TreepruneConfig


def load_config(cli_path: str | None = None) -> TreepruneConfig:
    """Load config with resolution order: CLI > project-local > user-global > defaults."""
    config_paths = [
        Path(cli_path) if cli_path else None,
        Path("./treeprune.yaml"),
        Path.home() / ".treeprune" / "config.yaml",
    ]

    for path in config_paths:
        if path and path.exists():
            try:
                with open(path) as f:
                    raw = yaml.safe_load(f)
                if raw is None:
                    continue
                if not isinstance(raw, dict):
                    raise ConfigError(f"Invalid config in {path}: expected a mapping")
                raw = _expand_env_vars(raw)
                return TreepruneConfig(**raw)
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {path}: {e}") from e
            except ValidationError as e:
                raise ConfigError(f"Invalid config in {path}: {e}") from e

    return TreepruneConfig()


def _expand_env_vars(obj: object) -> object:
    """Recursively expand ${VAR} references in strings."""
    if isinstance(obj, str):
        return re.sub(r"\$\{(\w+)\}", lambda m: os.environ.get(m.group(1), ""), obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


# Default YAML template for `treeprune config init`
DEFAULT_CONFIG_TEMPLATE = """\
# treeprune.yaml

# Junk files are deleted wherever they are found, in either tree
junk:
  use_defaults: true           # .DS_Store, Thumbs.db, ._*, *~ ...
  extra_patterns: []           # regexes matched against the base filename
  # extra_patterns: ['^\\.directory$']

# Byte comparison
compare:
  chunk_size: 1024             # bytes read per step from each file

# Logging
log_level: "info"              # debug | info | warn | error
"""
