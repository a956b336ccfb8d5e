"""
Managers for configuration
"""

from .config_manager import ConfigManager
from .attribute_manager import AttributeManager
from .transition_manager import TransitionManager
from .midi_manager import MidiManager

__all__ = ['ConfigManager', 'AttributeManager', 'TransitionManager', 'MidiManager']
