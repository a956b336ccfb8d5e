"""
Config Manager

Main configuration manager with include system support.
Loads modular YAML files and initializes sub-managers.
"""

import yaml
from pathlib import Path
from typing import Dict, List, Optional, TYPE_CHECKING

from models.domain.application import ApiConfig, EngineConfig, LoggingConfig
from models.enums import LogCategory, LogLevel
from utils.logger import get_logger

if TYPE_CHECKING:
    from managers.attribute_manager import AttributeManager
    from managers.transition_manager import TransitionManager
    from managers.midi_manager import MidiManager

log = get_logger().for_category(LogCategory.CONFIG)

SRC_DIR = Path(__file__).resolve().parent.parent


class ConfigManager:
    """
    Main configuration manager with include system support

    Loads config.yaml and processes include: directive to load modular YAML files.
    Initializes sub-managers (AttributeManager, TransitionManager, MidiManager).

    Example:
        config = ConfigManager()
        config.load()

        fps = config.engine.fps
        hue = config.attribute_manager.get_config("hue")
        warm = config.transition_manager.get_configuration("warm")
    """

    def __init__(
        self,
        config_path: str = "config/config.yaml",
        defaults_path: str = "config/factory_defaults.yaml",
        base_dir: Optional[Path] = None
    ):
        """
        Initialize ConfigManager

        Args:
            config_path: Path to main config.yaml (relative to base_dir)
            defaults_path: Path to factory defaults fallback (relative to base_dir)
            base_dir: Directory paths are resolved against (default: src/)
        """
        self.base_dir = Path(base_dir) if base_dir is not None else SRC_DIR
        self.config_path = Path(config_path)
        self.factory_defaults_path = Path(defaults_path)
        self.data: Dict = {}
        self.using_defaults = False

        # Sub-managers (initialized in load())
        self.attribute_manager: 'AttributeManager'
        self.transition_manager: 'TransitionManager'
        self.midi_manager: 'MidiManager'

    def load(self) -> Dict:
        """
        Load YAML configuration with include system support

        Process:
        1. Load main config.yaml
        2. If it has 'include:' list, load and merge those files
        3. Otherwise treat as monolithic config
        4. Fallback to factory defaults on failure
        5. Initialize sub-managers

        Returns:
            Merged config data dict
        """
        full_path = self.base_dir / self.config_path
        try:
            with open(full_path, "r", encoding="utf-8") as f:
                main_config = yaml.safe_load(f) or {}

            if 'include' in main_config:
                log.info("Using include-based configuration")
                self.data = self._load_with_includes(main_config['include'], full_path.parent)
            else:
                log.info("Using monolithic configuration")
                self.data = main_config
            self.using_defaults = False

        except Exception as ex:
            log.error("Failed to load config.yaml", error=str(ex), error_type=type(ex).__name__)
            log.warn("Falling back to factory defaults")

            defaults_path = self.base_dir / self.factory_defaults_path
            with open(defaults_path, "r", encoding="utf-8") as f:
                self.data = yaml.safe_load(f) or {}
            self.using_defaults = True

        self._initialize_managers()
        return self.data

    def _load_with_includes(self, include_list: List[str], config_dir: Path) -> Dict:
        """
        Load and merge multiple YAML files from include list

        Args:
            include_list: List of filenames to load (e.g., ["engine.yaml", "attributes.yaml"])
            config_dir: Directory containing config files

        Returns:
            Merged config dict (later files override earlier top-level keys)
        """
        merged = {}

        for filename in include_list:
            filepath = config_dir / filename
            try:
                with open(filepath, 'r', encoding='utf-8') as f:
                    file_data = yaml.safe_load(f)
                    if file_data:
                        merged.update(file_data)
                        log.info(f"Loaded {filename}", keys=str(list(file_data.keys())))
            except FileNotFoundError:
                log.error(f"File not found: {filename}")
                raise
            except Exception as ex:
                log.error(f"Error loading {filename}", error=str(ex))
                raise

        log.info("Config merge complete", total_keys=len(merged), keys=str(list(merged.keys())[:10]))
        return merged

    def _initialize_managers(self) -> None:
        """
        Initialize sub-managers with loaded config data

        Creates:
        - AttributeManager: attribute definitions and live attributes
        - TransitionManager: states, configurations, impulses
        - MidiManager: MIDI layout and control bindings
        """
        from managers.attribute_manager import AttributeManager
        from managers.transition_manager import TransitionManager
        from managers.midi_manager import MidiManager

        self.attribute_manager = AttributeManager(self.data)
        if not self.attribute_manager.configs:
            log.warn("No attributes defined in config!")

        try:
            self.transition_manager = TransitionManager(self.data, self.attribute_manager)
        except Exception as ex:
            log.error("Failed to initialize TransitionManager, using empty", error=str(ex))
            self.transition_manager = TransitionManager({}, self.attribute_manager)

        try:
            self.midi_manager = MidiManager(self.data)
        except Exception as ex:
            log.warn("Failed to initialize MidiManager, using empty", error=str(ex))
            self.midi_manager = MidiManager({})

    # ===== Application sections =====

    @property
    def engine(self) -> EngineConfig:
        section = self.data.get("engine") or {}
        return EngineConfig(
            fps=int(section.get("fps", 60)),
            min_duration_ms=float(section.get("min_duration_ms", 1.0)),
        )

    @property
    def api(self) -> ApiConfig:
        section = self.data.get("api") or {}
        return ApiConfig(
            enabled=bool(section.get("enabled", True)),
            host=section.get("host", "0.0.0.0"),
            port=int(section.get("port", 8000)),
            cors_origins=section.get("cors_origins"),
        )

    @property
    def logging(self) -> LoggingConfig:
        section = self.data.get("logging") or {}
        level = self._parse_level(section.get("level", "INFO"), LogLevel.INFO)

        categories = {}
        for name, value in (section.get("categories") or {}).items():
            try:
                category = LogCategory[str(name).upper()]
            except KeyError:
                log.warn("Unknown log category ignored", category=name)
                continue
            categories[category] = self._parse_level(value, level)

        return LoggingConfig(level=level, colors=bool(section.get("colors", True)), categories=categories)

    @staticmethod
    def _parse_level(value, fallback: LogLevel) -> LogLevel:
        name = str(value).upper()
        try:
            return LogLevel[name]
        except KeyError:
            log.warn(f"Unknown log level, using {fallback.name}", level=name)
            return fallback
