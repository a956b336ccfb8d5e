"""Domain models - Config objects"""

from models.domain.attribute import AttributeConfig
from models.domain.transition import StateConfig, ConfigurationConfig, ImpulseConfig
from models.domain.midi import MidiLayout, MidiBindingConfig
from models.domain.application import EngineConfig, ApiConfig, LoggingConfig

__all__ = [
    "AttributeConfig",
    "StateConfig",
    "ConfigurationConfig",
    "ImpulseConfig",
    "MidiLayout",
    "MidiBindingConfig",
    "EngineConfig",
    "ApiConfig",
    "LoggingConfig",
]
