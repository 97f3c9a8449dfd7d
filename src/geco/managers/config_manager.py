"""
Config Manager

Loads YAML configuration (with include: support) and turns it into a typed
GecoConfig.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from geco.models.config import ApiConfig, EngineConfig, GecoConfig, LoggingConfig, StorageConfig
from geco.models.domain.document import FRAME_MAX
from geco.models.enums import LogCategory, LogLevel
from geco.utils.enum_helper import EnumHelper
from geco.utils.logger import get_logger

log = get_logger().for_category(LogCategory.CONFIG)

CONFIG_DIR = Path(__file__).resolve().parent.parent / "config"


class ConfigManager:
    """
    Main configuration manager with include system support

    Loads config.yaml and processes include: directive to load modular YAML
    files. Falls back to factory_defaults.yaml when the main configuration
    cannot be read.

    Example:
        config = ConfigManager().load()
        config.engine.default_total_frames   # 100
        config.api.port                      # 8000
    """

    def __init__(
        self,
        config_path: Optional[Union[str, Path]] = None,
        defaults_path: Optional[Union[str, Path]] = None
    ):
        """
        Args:
            config_path: Main YAML file (default: packaged config/config.yaml)
            defaults_path: Fallback YAML file (default: packaged config/factory_defaults.yaml)
        """
        self.config_path = Path(config_path) if config_path else CONFIG_DIR / "config.yaml"
        self.factory_defaults_path = Path(defaults_path) if defaults_path else CONFIG_DIR / "factory_defaults.yaml"
        self.data: Dict[str, Any] = {}
        self.config: GecoConfig = GecoConfig()

    def load(self) -> GecoConfig:
        """
        Load YAML configuration

        Process:
        1. Load main config.yaml
        2. If it has 'include:' list, load and merge those files (relative to it)
        3. Keys in the main file itself override included ones
        4. Fallback to factory defaults on failure

        Returns:
            Typed GecoConfig
        """
        try:
            main_config = self._read_yaml(self.config_path)

            if 'include' in main_config:
                log.info("Using include-based configuration", file=str(self.config_path))
                merged = self._load_with_includes(main_config['include'], self.config_path.parent)
                merged.update({k: v for k, v in main_config.items() if k != 'include'})
                self.data = merged
            else:
                log.info("Using monolithic configuration", file=str(self.config_path))
                self.data = main_config

            self.config = self.parse(self.data)

        except (OSError, yaml.YAMLError, ValueError, TypeError) as ex:
            log.error("Failed to load config", error=str(ex), error_type=type(ex).__name__)
            log.warn("Falling back to factory defaults", file=str(self.factory_defaults_path))
            self.data = self._read_yaml(self.factory_defaults_path)
            self.config = self.parse(self.data)

        return self.config

    # ------------------------------------------------------------------
    # File handling
    # ------------------------------------------------------------------

    @staticmethod
    def _read_yaml(path: Path) -> Dict[str, Any]:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"{path.name}: top level must be a mapping")
        return data

    def _load_with_includes(self, include_list: List[str], config_dir: Path) -> Dict[str, Any]:
        """
        Load and merge multiple YAML files from include list

        Args:
            include_list: Filenames to load (e.g., ["engine.yaml", "server.yaml"])
            config_dir: Directory containing config files

        Returns:
            Merged config dict
        """
        merged: Dict[str, Any] = {}

        for filename in include_list:
            file_data = self._read_yaml(config_dir / filename)
            merged.update(file_data)
            log.debug(f"Loaded {filename}", keys=str(list(file_data.keys())))

        log.info("Config merge complete", total_keys=len(merged))
        return merged

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    @staticmethod
    def parse(data: Dict[str, Any]) -> GecoConfig:
        """
        Build GecoConfig from a raw dict.

        Missing sections/keys keep their dataclass defaults.

        Raises:
            ValueError: a value has the wrong shape (e.g. non-positive frame count)
        """
        engine_raw = data.get("engine") or {}
        logging_raw = data.get("logging") or {}
        api_raw = data.get("api") or {}
        storage_raw = data.get("storage") or {}

        defaults = GecoConfig()

        engine = EngineConfig(
            default_animation_name=str(engine_raw.get("default_animation_name", defaults.engine.default_animation_name)),
            default_total_frames=int(engine_raw.get("default_total_frames", defaults.engine.default_total_frames)),
            slerp_epsilon=float(engine_raw.get("slerp_epsilon", defaults.engine.slerp_epsilon)),
        )
        if not 0 < engine.default_total_frames <= FRAME_MAX:
            raise ValueError(f"engine.default_total_frames must be in 1..{FRAME_MAX}, got {engine.default_total_frames}")

        level_name = logging_raw.get("level")
        logging_cfg = LoggingConfig(
            level=EnumHelper.from_string(LogLevel, str(level_name)) if level_name else defaults.logging.level,
            use_colors=bool(logging_raw.get("use_colors", defaults.logging.use_colors)),
        )

        api = ApiConfig(
            title=str(api_raw.get("title", defaults.api.title)),
            host=str(api_raw.get("host", defaults.api.host)),
            port=int(api_raw.get("port", defaults.api.port)),
            docs_enabled=bool(api_raw.get("docs_enabled", defaults.api.docs_enabled)),
            cors_origins=list(api_raw.get("cors_origins", defaults.api.cors_origins) or []),
        )

        storage = StorageConfig(
            max_blob_bytes=int(storage_raw.get("max_blob_bytes", defaults.storage.max_blob_bytes)),
        )

        return GecoConfig(engine=engine, logging=logging_cfg, api=api, storage=storage)
