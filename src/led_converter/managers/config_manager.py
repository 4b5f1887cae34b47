"""
Config Manager

Loads converter defaults from YAML: packaged factory defaults first, then an
optional user file merged over them section by section.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from led_converter.models.config import ConverterConfig
from led_converter.models.enums import LogCategory
from led_converter.utils.logger import get_logger, configure_logger

log = get_logger().for_category(LogCategory.CONFIG)

DEFAULTS_PATH = Path(__file__).parent.parent / "config" / "defaults.yaml"


class ConfigManager:
    """
    Converter configuration manager

    Example:
        config = ConfigManager("converter.yaml")
        config.load()

        config.export.fps            # 30
        config.playback.loop_mode    # LoopMode.LOOP
    """

    def __init__(self, config_path: Optional[Union[str, Path]] = None, defaults_path: Union[str, Path] = DEFAULTS_PATH):
        """
        Args:
            config_path: Optional user config file
            defaults_path: Factory defaults fallback
        """
        self.config_path = Path(config_path) if config_path else None
        self.defaults_path = Path(defaults_path)
        self.data: Dict[str, Any] = {}
        self.config: ConverterConfig = ConverterConfig()

    def load(self) -> ConverterConfig:
        """
        Load and validate configuration

        Process:
        1. Load factory defaults
        2. Merge the user file over them (if given)
        3. Validate into ConverterConfig
        4. On any failure fall back to factory defaults alone
        5. Apply the logging section to the global logger

        Returns:
            Validated ConverterConfig
        """
        defaults = self._read_yaml(self.defaults_path)

        try:
            merged = dict(defaults)
            if self.config_path is not None:
                user_data = self._read_yaml(self.config_path)
                merged = self._merge(defaults, user_data)
                log.info(f"Loaded {self.config_path.name}", keys=str(list(user_data.keys())))
            self.config = ConverterConfig.model_validate(merged)
            self.data = merged

        except (OSError, yaml.YAMLError, ValidationError, ValueError) as ex:
            log.error("Failed to load config", path=str(self.config_path), error=str(ex), error_type=type(ex).__name__)
            log.warn("Falling back to factory defaults")
            self.config = ConverterConfig.model_validate(defaults)
            self.data = defaults

        self._apply_logging()
        return self.config

    @staticmethod
    def _read_yaml(path: Path) -> Dict[str, Any]:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"{path.name}: top level must be a mapping")
        return data

    @staticmethod
    def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Per-section shallow merge (override wins)"""
        merged = dict(base)
        for section, values in override.items():
            if isinstance(values, dict) and isinstance(merged.get(section), dict):
                merged[section] = {**merged[section], **values}
            else:
                merged[section] = values
        return merged

    def _apply_logging(self) -> None:
        settings = self.config.logging
        configure_logger(min_level=settings.log_level, use_colors=settings.use_colors)

    # === Section accessors ===

    @property
    def export(self):
        return self.config.export

    @property
    def playback(self):
        return self.config.playback

    @property
    def resize(self):
        return self.config.resize

    @property
    def logging(self):
        return self.config.logging
