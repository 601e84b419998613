"""Configuration: environment (`A1S_*`) and YAML file."""
from .env_config import A1sEnv, load_a1s_env
from .loader import A1sConfig, load_config, parse_seconds

__all__ = ["A1sEnv", "load_a1s_env", "A1sConfig", "load_config", "parse_seconds"]
