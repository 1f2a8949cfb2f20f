"""Locate, read and validate compareview.yaml."""

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import CompareviewConfig

PROJECT_CONFIG = Path("compareview.yaml")
USER_CONFIG = Path(".compareview") / "config.yaml"

_ENV_REF = re.compile(r"\$\{(\w+)(?::-([^}]*))?\}")


def config_search_paths(cli_path: str | None = None) -> list[Path]:
    """Candidate config files, highest priority first."""
    paths = [PROJECT_CONFIG, Path.home() / USER_CONFIG]
    if cli_path:
        paths.insert(0, Path(cli_path))
    return paths


def load_config(cli_path: str | None = None) -> CompareviewConfig:
    """Return the first non-empty config file found, or the defaults.

    Raises ValueError naming the file when it is not YAML or does not
    describe a valid compareview config.
    """
    for path in config_search_paths(cli_path):
        if not path.is_file():
            continue
        raw = _read_yaml(path)
        if raw is None:
            continue
        if not isinstance(raw, dict):
            raise ValueError(
                f"compareview config {path} must be a mapping, got {type(raw).__name__}"
            )
        try:
            return CompareviewConfig.model_validate(_expand_env_vars(raw))
        except ValidationError as e:
            raise ValueError(f"Invalid compareview config in {path}: {e}") from e

    return CompareviewConfig()


def _read_yaml(path: Path) -> object:
    try:
        return yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ValueError(f"compareview config {path} is not valid YAML: {e}") from e


def _expand_env_vars(obj: object) -> object:
    """Replace ``${VAR}`` and ``${VAR:-default}`` in every string value."""
    if isinstance(obj, str):
        return _ENV_REF.sub(lambda m: os.environ.get(m.group(1), m.group(2) or ""), obj)
    if isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


# Default YAML template for `compareview config init`
DEFAULT_CONFIG_TEMPLATE = """\
# compareview.yaml

# Reviewers API
api:
  host: "https://addons.mozilla.org"
  version: "v4"
  token_env: "COMPAREVIEW_AUTH_TOKEN"   # env var holding the API token
  timeout: 30.0

# Display
ui:
  lang: "en-US"                  # used when building compare URLs

# Logging
log_level: "info"              # debug | info | warn | error
log_format: "text"             # text | json
"""
