"""Locate, read and validate folio.yaml."""

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import FolioConfig

_ENV_REF_RE = re.compile(r"\$\{(\w+)\}")


def _candidate_paths(cli_path: str | None) -> list[Path]:
    """CLI > project-local > user-global."""
    paths = [Path(cli_path)] if cli_path else []
    paths += [Path("folio.yaml"), Path.home() / ".folio" / "config.yaml"]
    return paths


def load_config(cli_path: str | None = None) -> FolioConfig:
    """Load the first config file that exists and is non-empty, else defaults.

    A relative ``content.root_dir`` set in a file is taken relative to that
    file's directory, so ``folio -c /site/folio.yaml`` finds the same content
    from any working directory.
    """
    for path in _candidate_paths(cli_path):
        if not path.is_file():
            continue
        raw = _read_yaml(path)
        if raw is None:
            continue
        try:
            config = FolioConfig.model_validate(_expand_env_vars(raw))
        except ValidationError as e:
            raise ValueError(f"Invalid config in {path}: {e}") from e
        return _anchor_root(config, path.resolve().parent)

    return FolioConfig()


def _read_yaml(path: Path) -> object:
    try:
        with open(path, encoding="utf-8") as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e


def _anchor_root(config: FolioConfig, base: Path) -> FolioConfig:
    if "root_dir" not in config.content.model_fields_set:
        return config
    root = Path(config.content.root_dir).expanduser()
    if root.is_absolute():
        return config
    content = config.content.model_copy(update={"root_dir": str((base / root).resolve())})
    return config.model_copy(update={"content": content})


def _expand_env_vars(obj: object) -> object:
    """Replace ``${VAR}`` in every string; unset variables become empty."""
    if isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    if isinstance(obj, str):
        return _ENV_REF_RE.sub(lambda m: os.environ.get(m.group(1), ""), obj)
    return obj


# Default YAML template for `folio config init`
DEFAULT_CONFIG_TEMPLATE = """\
# folio.yaml

# Content source
content:
  root_dir: "."                # site root, relative to this file; documents live under <root_dir>/<data_dir>
  data_dir: "data"
  extension: ".mdx"
  encoding: "utf-8"

# Markup compilation
markup:
  # Applied in this order
  remark_transforms: ["autolink-headings", "slug", "code-titles"]
  rehype_transforms: ["highlight"]
  highlight:
    skip_languages: ["text", "plaintext", "txt"]
  typographer: false

# Listing pages
summaries:
  on_error: "skip"             # skip | abort
  sort_key: "publishedAt"

# Logging
log_level: "info"              # debug | info | warn | error
log_format: "text"             # text | json
"""
