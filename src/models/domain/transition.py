"""Transition domain models - named states, configurations and impulses"""

from dataclasses import dataclass, field
from typing import Dict, List


@dataclass(frozen=True)
class StateConfig:
    """Indexed state over one attribute"""
    name: str
    attribute: str
    levels: List[float]
    duration_ms: float = 1000.0
    description: str = ""


@dataclass(frozen=True)
class ConfigurationConfig:
    """Named set of target values reached together"""
    name: str
    targets: Dict[str, float] = field(default_factory=dict)
    duration_ms: float = 1000.0
    persistent: bool = False
    description: str = ""


@dataclass(frozen=True)
class ImpulseConfig:
    """
    Named temporary excursion

    immediate=True jumps to the targets and only eases back.
    """
    name: str
    targets: Dict[str, float] = field(default_factory=dict)
    duration_ms: float = 1000.0
    immediate: bool = False
    description: str = ""
