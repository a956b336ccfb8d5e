"""
Transition Manager - Processes states, configurations and impulses

Parses the 'states', 'configurations' and 'impulses' config sections.
Entries referring to unknown attributes are warned about and skipped.
"""

from typing import Dict, Optional

from managers.attribute_manager import AttributeManager
from models.domain.transition import ConfigurationConfig, ImpulseConfig, StateConfig
from models.enums import LogCategory
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.CONFIG)


class TransitionManager:
    """
    Named transition definitions

    Example:
        trans_mgr = TransitionManager(config_data, attr_mgr)
        warm = trans_mgr.get_configuration("warm")
    """

    def __init__(self, config_data: dict, attribute_manager: AttributeManager):
        self.attribute_manager = attribute_manager
        self.states: Dict[str, StateConfig] = {}
        self.configurations: Dict[str, ConfigurationConfig] = {}
        self.impulses: Dict[str, ImpulseConfig] = {}

        self._parse_states(config_data.get("states") or {})
        self._parse_configurations(config_data.get("configurations") or {})
        self._parse_impulses(config_data.get("impulses") or {})

        log.info(
            "Transitions loaded",
            states=len(self.states),
            configurations=len(self.configurations),
            impulses=len(self.impulses)
        )

    def _known(self, owner: str, attribute: str) -> bool:
        if self.attribute_manager.get_attribute(attribute) is None:
            log.warn("Unknown attribute referenced, skipped", owner=owner, attribute=attribute)
            return False
        return True

    def _targets(self, owner: str, raw: dict) -> Dict[str, float]:
        return {
            attr: float(value)
            for attr, value in (raw or {}).items()
            if self._known(owner, attr)
        }

    def _parse_states(self, section: dict) -> None:
        for name, data in section.items():
            attribute = data.get("attribute", "")
            if not self._known(name, attribute):
                continue

            levels = [float(v) for v in data.get("levels", [])]
            if levels != sorted(levels):
                log.warn("State levels must be ascending, sorted", state=name)
                levels.sort()

            self.states[name] = StateConfig(
                name=name,
                attribute=attribute,
                levels=levels,
                duration_ms=float(data.get("duration_ms", 1000.0)),
                description=data.get("description", ""),
            )

    def _parse_configurations(self, section: dict) -> None:
        for name, data in section.items():
            targets = self._targets(name, data.get("targets"))
            if not targets:
                log.warn("Configuration without valid targets, skipped", configuration=name)
                continue

            self.configurations[name] = ConfigurationConfig(
                name=name,
                targets=targets,
                duration_ms=float(data.get("duration_ms", 1000.0)),
                persistent=bool(data.get("persistent", False)),
                description=data.get("description", ""),
            )

    def _parse_impulses(self, section: dict) -> None:
        for name, data in section.items():
            targets = self._targets(name, data.get("targets"))
            if not targets:
                log.warn("Impulse without valid targets, skipped", impulse=name)
                continue

            self.impulses[name] = ImpulseConfig(
                name=name,
                targets=targets,
                duration_ms=float(data.get("duration_ms", 1000.0)),
                immediate=bool(data.get("immediate", False)),
                description=data.get("description", ""),
            )

    def get_state(self, name: str) -> Optional[StateConfig]:
        return self.states.get(name)

    def get_configuration(self, name: str) -> Optional[ConfigurationConfig]:
        return self.configurations.get(name)

    def get_impulse(self, name: str) -> Optional[ImpulseConfig]:
        return self.impulses.get(name)
