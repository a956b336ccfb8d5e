"""
Transition schemas - configurations, impulses, states and engine status
"""

from pydantic import BaseModel, Field
from typing import Dict, Optional


class ConfigurationResponse(BaseModel):
    name: str
    targets: Dict[str, float] = Field(description="Attribute name → target value")
    duration_ms: float
    persistent: bool
    description: str = ""


class ConfigurationListResponse(BaseModel):
    configurations: list[ConfigurationResponse]
    count: int


class ConfigurationApplyRequest(BaseModel):
    """Optional duration override"""
    duration_ms: Optional[float] = Field(None, ge=0, description="Overrides the configured duration")


class ImpulseResponse(BaseModel):
    name: str
    targets: Dict[str, float] = Field(description="Attribute name → peak value")
    duration_ms: float
    immediate: bool = Field(description="Starts at peak instead of rising to it")
    description: str = ""


class ImpulseListResponse(BaseModel):
    impulses: list[ImpulseResponse]
    count: int


class StateResponse(BaseModel):
    name: str
    attribute: str
    levels: list[float]
    current_index: int = Field(description="Index whose level is closest to the current value")
    aimed_index: int
    aimed_value: float
    duration_ms: float


class StateListResponse(BaseModel):
    states: list[StateResponse]
    count: int


class StateStepRequest(BaseModel):
    delta: int = Field(description="Number of levels to move; negative moves down")
    duration_ms: Optional[float] = Field(None, ge=0, description="Overrides the configured duration")


class StateGotoRequest(BaseModel):
    index: int = Field(description="Target level index")
    duration_ms: Optional[float] = Field(None, ge=0, description="Overrides the configured duration")


class TransitionResultResponse(BaseModel):
    """Outcome of a transition request"""
    name: str
    transitions: Optional[int] = Field(None, description="Number of transitions registered")
    aimed_index: Optional[int] = Field(None, description="New aimed index (state requests)")


class TickMetrics(BaseModel):
    fps_target: int
    running: bool
    paused: bool
    ticks_run: int
    tick_errors: int
    average_tick_ms: float


class EngineResponse(BaseModel):
    managed_attributes: list[str] = Field(description="Attributes with an active transition sequence")
    active_count: int = Field(description="Tracked timed modifiers")
    ticks: int = Field(description="Engine ticks applied")
    last_elapsed_ms: float
    tick_loop: Optional[TickMetrics] = None


class EngineResetResponse(BaseModel):
    discarded: int = Field(description="Timed modifiers dropped by the reset")
