"""
Models package - Attributes, configuration records and events
"""

from .enums import LogLevel, LogCategory, TransitionKind, EventSource, MidiControlType
from .attribute import Attribute, ValueAttribute, FieldAttribute, CallbackAttribute

__all__ = [
    'LogLevel',
    'LogCategory',
    'TransitionKind',
    'EventSource',
    'MidiControlType',
    'Attribute',
    'ValueAttribute',
    'FieldAttribute',
    'CallbackAttribute',
]
