"""Application-level configuration models"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from models.enums import LogCategory, LogLevel


@dataclass(frozen=True)
class EngineConfig:
    """Tick loop settings"""
    fps: int = 60
    min_duration_ms: float = 1.0


@dataclass(frozen=True)
class ApiConfig:
    """REST API server settings"""
    enabled: bool = True
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: Optional[List[str]] = None


@dataclass(frozen=True)
class LoggingConfig:
    level: LogLevel = LogLevel.INFO
    colors: bool = True
    categories: Dict[LogCategory, LogLevel] = field(default_factory=dict)
