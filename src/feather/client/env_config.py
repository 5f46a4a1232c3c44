import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Union

from feather.client import BASE_URL_ENV_VAR, DEFAULT_ENV_CONFIG_FILE_PATH


@dataclass
class Environment:
    name: str
    base_url: str


@dataclass
class FeatherEnvConfig:
    environments: Dict[str, Environment] = field(default_factory=dict)
    default_environment: Optional[str] = None


def load_env_config(path: Union[str, os.PathLike] = DEFAULT_ENV_CONFIG_FILE_PATH) -> FeatherEnvConfig:
    """Load config from JSON file. Returns empty config if file doesn't exist."""
    expanded = Path(path).expanduser()
    if not expanded.exists():
        return FeatherEnvConfig()

    data = json.loads(expanded.read_text())

    environments = {}
    for name, env_data in data.get("environments", {}).items():
        environments[name] = Environment(name=name, base_url=env_data["base_url"])

    return FeatherEnvConfig(
        environments=environments,
        default_environment=data.get("default_environment"),
    )


def resolve_environment(config: FeatherEnvConfig, env_name: Optional[str] = None) -> Environment:
    """Resolve which environment to use.

    Resolution order:
    1. Explicit env_name
    2. default_environment from config
    3. FEATHER_BASE_URL environment variable
    """
    if env_name:
        if env_name not in config.environments:
            raise ValueError(f"Unknown environment: {env_name}")
        return config.environments[env_name]

    if config.default_environment and config.default_environment in config.environments:
        return config.environments[config.default_environment]

    base_url = os.environ.get(BASE_URL_ENV_VAR)
    if base_url:
        return Environment(name="default", base_url=base_url)

    raise ValueError(f"No environment given, no default environment configured and {BASE_URL_ENV_VAR} is not set")
