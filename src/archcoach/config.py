"""YAML config loader — reads archcoach.yml into CoachConfig."""

from pathlib import Path

import yaml

from archcoach.schemas.config import CoachConfig


def load_config(path: str | Path | None = None) -> CoachConfig:
    """Load and validate a config file.

    With no path the defaults are returned. Raises ``FileNotFoundError`` if
    the path doesn't exist and ``pydantic.ValidationError`` if the YAML
    content is invalid.
    """
    if path is None:
        return CoachConfig()

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    raw = yaml.safe_load(path.read_text())
    if raw is None:
        # Empty or comment-only file
        return CoachConfig()
    if not isinstance(raw, dict):
        raise ValueError(f"Config file must be a YAML mapping, got {type(raw).__name__}")

    # Keys left blank in YAML load as None; drop them so the defaults apply.
    raw = {key: value for key, value in raw.items() if value is not None}

    return CoachConfig(**raw)
