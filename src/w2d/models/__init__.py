"""w2d configuration models."""

from .config import AUTH_KEY_ENV_VAR, DeepLConfig, NetworkConfig, ParserConfig, W2DConfig

__all__ = [
    "AUTH_KEY_ENV_VAR",
    "DeepLConfig",
    "NetworkConfig",
    "ParserConfig",
    "W2DConfig",
]
