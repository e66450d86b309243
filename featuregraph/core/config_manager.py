"""Configuration management"""
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from featuregraph.core.errors import ConfigurationError
from featuregraph.utils.helpers import deep_get
from featuregraph.utils.logger import setup_logger

logger = setup_logger(__name__)


class ConfigManager:
    """Loads the YAML configuration and an optional environment overlay"""

    def __init__(self, config_path: str, environment: Optional[str] = None):
        self.config_path = Path(config_path)
        self.environment = environment
        self.config: Dict[str, Any] = {}

    def load_config(self) -> Dict[str, Any]:
        """Load and merge configuration files"""
        self.config = {}

        if self.config_path.exists():
            self.config = self._read_yaml(self.config_path)
        else:
            logger.debug(f"Config file not found, using defaults: {self.config_path}")

        if self.environment:
            env_config_path = self.config_path.parent / 'environments' / f'{self.environment}.yaml'
            if env_config_path.exists():
                env_config = self._read_yaml(env_config_path)

                # overrides replace whole keys of a section before the deep merge
                if 'overrides' in env_config:
                    overrides = env_config.pop('overrides')
                    self._apply_overrides(self.config, overrides)

                self.config = self._merge_configs(self.config, env_config)
            else:
                logger.warning(f"Environment config not found: {env_config_path}")

        self.config = self._process_env_vars(self.config)

        logger.info(f"Configuration loaded from {self.config_path}"
                    + (f" for environment: {self.environment}" if self.environment else ""))
        return self.config

    def _read_yaml(self, path: Path) -> Dict[str, Any]:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"{path} must contain a mapping at the top level")
        return data

    def _merge_configs(self, base: Dict, override: Dict) -> Dict:
        """Deep merge two dictionaries"""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_configs(result[key], value)
            else:
                result[key] = value

        return result

    def _apply_overrides(self, base: Dict, overrides: Dict) -> None:
        for section, values in (overrides or {}).items():
            if section in base and isinstance(values, dict) and isinstance(base[section], dict):
                for key, value in values.items():
                    base[section][key] = value
            else:
                base[section] = values

    def _process_env_vars(self, config: Any) -> Any:
        """Replace ${VAR} with environment variables"""
        if isinstance(config, dict):
            return {k: self._process_env_vars(v) for k, v in config.items()}
        elif isinstance(config, list):
            return [self._process_env_vars(item) for item in config]
        elif isinstance(config, str) and config.startswith('${') and config.endswith('}'):
            var_name = config[2:-1]
            return os.environ.get(var_name, config)
        else:
            return config

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key (supports dot notation)"""
        return deep_get(self.config, key, default)
