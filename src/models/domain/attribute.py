"""Attribute domain models"""

from dataclasses import dataclass
from typing import Optional

from models.attribute import ValueAttribute


@dataclass(frozen=True)
class AttributeConfig:
    """Immutable attribute configuration from YAML"""
    name: str
    default: float = 0.0
    min: Optional[float] = None
    max: Optional[float] = None
    periodic: bool = False
    enforce_extrema: bool = True
    unit: str = ""
    description: str = ""

    def validate(self, value: float) -> bool:
        """Check if value is within configured constraints"""
        if self.min is not None and value < self.min:
            return False
        if self.max is not None and value > self.max:
            return False
        return True

    def build(self) -> ValueAttribute:
        """Create a live attribute initialized to the default value"""
        return ValueAttribute(
            self.default,
            name=self.name,
            min_value=self.min,
            max_value=self.max,
            periodic=self.periodic,
            enforce_extrema=self.enforce_extrema,
            unit=self.unit,
        )
