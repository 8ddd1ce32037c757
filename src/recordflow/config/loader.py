"""
YAML configuration loading.

String values may reference environment variables as ``${VAR}`` or
``${VAR:default}``. A ``base.yaml`` next to the loaded file, when present,
supplies the values the file leaves out.
"""

import os
import re
from pathlib import Path
from typing import Any

import yaml

from recordflow.config.settings import ProcessingConfig

_ENV_REFERENCE = re.compile(r"\$\{(?P<name>[^}:]+)(?::(?P<default>[^}]*))?\}")


def _expand_env(node: Any) -> Any:
    """Substitute environment references in every string of a YAML tree."""
    if isinstance(node, str):
        return _ENV_REFERENCE.sub(
            lambda m: os.environ.get(m["name"], m["default"] or ""), node
        )
    if isinstance(node, dict):
        return {key: _expand_env(value) for key, value in node.items()}
    if isinstance(node, list):
        return [_expand_env(item) for item in node]
    return node


def _overlay(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Overlay one config mapping on another, section by section."""
    merged = dict(base)
    for key, value in overrides.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            value = _overlay(current, value)
        merged[key] = value
    return merged


def load_yaml(path: Path) -> dict[str, Any]:
    """
    Read one YAML config file with environment references expanded.

    Raises:
        ValueError: If the file holds something other than a mapping.
    """
    with path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = f"Config file must contain a mapping at top level: {path}"
        raise ValueError(msg)
    return _expand_env(data)


def load_config(
    config_path: Path,
    base_path: Path | None = None,
) -> ProcessingConfig:
    """
    Load processing configuration from YAML file(s).

    Every section is optional:
        - resources.root, resources.package, resources.encoding
        - schemas.structured, schemas.markup
        - markup.namespace
        - logging.level, logging.json_output

    Args:
        config_path: Path to the main configuration file.
        base_path: Optional path to base configuration for inheritance.

    Returns:
        Fully validated ProcessingConfig instance.
    """
    if base_path is not None:
        base_data = load_yaml(base_path)
    else:
        sibling_base = config_path.parent / "base.yaml"
        is_self = sibling_base.resolve() == config_path.resolve()
        base_data = (
            load_yaml(sibling_base)
            if sibling_base.exists() and not is_self
            else {}
        )

    main_data = load_yaml(config_path)
    merged = _overlay(base_data, main_data)

    # Relative resource roots are resolved against the config file location
    resources = merged.get("resources") or {}
    root = resources.get("root")
    if root:
        root_path = Path(root)
        if not root_path.is_absolute():
            root_path = config_path.parent / root_path
        merged["resources"] = {**resources, "root": root_path}

    return ProcessingConfig(**merged)
