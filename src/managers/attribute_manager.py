"""
Attribute Manager - Processes attribute definitions

Processes attribute metadata from ConfigManager (does NOT load files).
Parses definitions, builds the live attributes and provides lookup by name or id.
"""

from typing import Dict, List, Optional

from models.attribute import Attribute
from models.domain.attribute import AttributeConfig
from models.enums import LogCategory
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.CONFIG)

KNOWN_KEYS = {"default", "min", "max", "periodic", "enforce_extrema", "unit", "description"}


class AttributeManager:
    """
    Attribute registry (data processor + owner of live attributes)

    The manager holds the only strong references to the attributes it
    builds; the transition engine references them weakly.

    Example:
        attr_mgr = AttributeManager(config_data)

        hue = attr_mgr.get_attribute("hue")
        cfg = attr_mgr.get_config("hue")
    """

    def __init__(self, config_data: dict):
        """
        Args:
            config_data: Config dict with an 'attributes' section
        """
        self.configs: Dict[str, AttributeConfig] = {}
        self.attributes: Dict[str, Attribute] = {}
        self._by_id: Dict[int, Attribute] = {}
        self._process_data(config_data)

    def _process_data(self, data: dict) -> None:
        section = data.get("attributes") or {}

        for name, attr_data in section.items():
            attr_data = attr_data or {}

            unknown = set(attr_data) - KNOWN_KEYS
            if unknown:
                log.warn("Unknown attribute keys ignored", attribute=name, keys=sorted(unknown))

            config = AttributeConfig(
                name=name,
                default=float(attr_data.get("default", 0.0)),
                min=attr_data.get("min"),
                max=attr_data.get("max"),
                periodic=bool(attr_data.get("periodic", False)),
                enforce_extrema=bool(attr_data.get("enforce_extrema", True)),
                unit=attr_data.get("unit") or "",
                description=attr_data.get("description", ""),
            )

            if config.periodic and (config.min is None or config.max is None):
                log.warn("Periodic attribute needs min and max, skipped", attribute=name)
                continue

            if not config.validate(config.default):
                log.warn(
                    "Attribute default outside range",
                    attribute=name,
                    default=config.default,
                    min=config.min,
                    max=config.max
                )

            self.register(config)

        log.info("Attributes loaded", total=len(self.attributes))

    def register(self, config: AttributeConfig) -> Attribute:
        """Build and register an attribute, replacing any with the same name"""
        previous = self.attributes.get(config.name)
        if previous is not None:
            self._by_id.pop(previous.id, None)

        attribute = config.build()
        self.configs[config.name] = config
        self.attributes[config.name] = attribute
        self._by_id[attribute.id] = attribute
        return attribute

    def get_attribute(self, name: str) -> Optional[Attribute]:
        return self.attributes.get(name)

    def get_by_id(self, attr_id: int) -> Optional[Attribute]:
        return self._by_id.get(attr_id)

    def get_config(self, name: str) -> Optional[AttributeConfig]:
        return self.configs.get(name)

    def names(self) -> List[str]:
        return list(self.attributes)

    def get_all_attributes(self) -> Dict[str, Attribute]:
        return self.attributes.copy()
