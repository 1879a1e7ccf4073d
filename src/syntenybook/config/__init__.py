from .loader import load_config, load_config_with_overrides
from .schema import BuildSettings, QuerySettings, SyntenyConfig

__all__ = [
    "load_config",
    "load_config_with_overrides",
    "BuildSettings",
    "QuerySettings",
    "SyntenyConfig",
]
