"""
Attribute schemas - Pydantic models for attribute requests/responses
"""

from pydantic import BaseModel, Field
from typing import Optional


class AttributeResponse(BaseModel):
    """Live attribute state"""
    name: str = Field(description="Attribute name from config")
    id: int = Field(description="Process-unique attribute id")
    value: float = Field(description="Current value")
    min: Optional[float] = Field(None, description="Lower bound, if any")
    max: Optional[float] = Field(None, description="Upper bound, if any")
    periodic: bool = Field(description="Whether min and max are the same point")
    unit: str = Field("", description="Display unit")
    description: str = Field("", description="Free text from config")
    active_transitions: int = Field(0, description="Entries in the attribute's transition sequence")

    class Config:
        json_schema_extra = {
            "example": {
                "name": "hue",
                "id": 2,
                "value": 240.0,
                "min": 0.0,
                "max": 360.0,
                "periodic": True,
                "unit": "deg",
                "description": "Base hue",
                "active_transitions": 0
            }
        }


class AttributeListResponse(BaseModel):
    attributes: list[AttributeResponse]
    count: int


class AttributeSetRequest(BaseModel):
    """Set an attribute directly, without transition"""
    value: float = Field(description="New value (clamped when the attribute enforces bounds)")


class AttributeTransitionRequest(BaseModel):
    """Fade an attribute to a value"""
    value: float = Field(description="Target value")
    duration_ms: float = Field(
        1000.0,
        ge=0,
        description="Transition duration in milliseconds"
    )
    persistent: bool = Field(
        False,
        description="Keep holding the value after the transition completes"
    )
