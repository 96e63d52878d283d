"""Pydantic configuration models for w2d."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field, ValidationError

from ..errors import ConfigError

AUTH_KEY_ENV_VAR = "W2D_DEEPL_AUTH_KEY"


def _expand_env_var(value: Optional[str]) -> Optional[str]:
    """Expand environment variable references in a string.

    Supports $VAR and ${VAR} syntax. Returns original value if
    the env var is not set.
    """
    if value is None:
        return None

    pattern = r"\$\{([^}]+)\}|\$([A-Za-z_][A-Za-z0-9_]*)"

    def replace(match: re.Match) -> str:
        var_name = match.group(1) or match.group(2)
        return os.environ.get(var_name, match.group(0))

    return re.sub(pattern, replace, value)


class ParserConfig(BaseModel):
    """Markers used to locate the article inside a Wikipedia page."""

    title_id: str = Field("firstHeading", description="id of the h1 holding the article title")
    container_class: str = Field(
        "mw-parser-output",
        description="Class of the element whose direct children form the article body",
    )
    edit_section_class: str = Field("mw-editsection", description="Class of the [edit] span next to headings")
    visual_editor_class: str = Field(
        "mw-editsection-visualeditor",
        description="Class of the visual editor link inside the edit section",
    )
    heading_wrapper_class: str = Field(
        "mw-heading2",
        description="Class of the div newer skins wrap around section headings",
    )

    model_config = {"extra": "forbid", "frozen": True}


class NetworkConfig(BaseModel):
    """Configuration for fetching articles over HTTP."""

    user_agent: Optional[str] = Field(None, description="Custom User-Agent header")
    timeout: float = Field(30.0, gt=0, description="Request timeout in seconds")

    model_config = {"extra": "forbid"}


class DeepLConfig(BaseModel):
    """Configuration for the DeepL translation API.

    The auth key supports environment variable expansion, e.g.
    ``auth_key: ${W2D_DEEPL_AUTH_KEY}``.
    """

    auth_key: Optional[str] = Field(None, description="DeepL API authentication key")
    endpoint: Optional[str] = Field(
        None,
        description="Override the API base URL (default: chosen from the key type)",
    )

    model_config = {"extra": "forbid"}

    def model_post_init(self, __context: object) -> None:
        """Expand environment variables in the auth key after init."""
        if self.auth_key:
            object.__setattr__(self, "auth_key", _expand_env_var(self.auth_key))

    def resolve_auth_key(self, override: Optional[str] = None) -> Optional[str]:
        """Return the key from an explicit override, the config, or the environment."""
        return override or self.auth_key or os.environ.get(AUTH_KEY_ENV_VAR) or None


class W2DConfig(BaseModel):
    """
    Root configuration model for w2d.

    YAML format:
        parser:
          container_class: mw-parser-output
        network:
          timeout: 10
        deepl:
          auth_key: ${W2D_DEEPL_AUTH_KEY}
        log_level: DEBUG
    """

    parser: ParserConfig = Field(default_factory=ParserConfig)
    network: NetworkConfig = Field(default_factory=NetworkConfig)
    deepl: DeepLConfig = Field(default_factory=DeepLConfig)

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "WARNING",
        description="Logging level",
    )
    log_file: Optional[Path] = Field(None, description="Log file path")

    model_config = {"extra": "forbid"}

    def to_yaml(self) -> str:
        """Serialize config to YAML string."""
        import yaml

        return yaml.dump(self.model_dump(mode="json", exclude_none=True), default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> W2DConfig:
        """Load config from YAML string."""
        import yaml

        try:
            data = yaml.safe_load(yaml_str)
        except yaml.YAMLError as e:
            raise ConfigError(f"invalid YAML: {e}") from e

        try:
            return cls.model_validate(data or {})
        except ValidationError as e:
            raise ConfigError(f"invalid configuration: {e}") from e

    @classmethod
    def from_yaml_file(cls, path: Path) -> W2DConfig:
        """Load config from YAML file."""
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"cannot read config file {path}: {e}") from e
        return cls.from_yaml(text)
