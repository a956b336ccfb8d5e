"""
Attribute - bounded scalar cell owned by the host application

The transition engine only ever talks to attributes through get(), set(),
id, is_periodic() and period(). set() clamps into [min, max] when
enforce_extrema is enabled and notifies registered listeners. Periodic
attributes are never wrapped: on a periodic [0, 100] attribute without
extrema enforcement, 101 is a legal value equivalent to 1.
"""

import itertools
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional

from models.enums import LogCategory
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.ENGINE)

_attribute_ids = itertools.count(1)


class Attribute(ABC):
    """
    Base attribute

    Fluent setters return the attribute itself:

        attr = ValueAttribute(0.0).set_min(0).set_max(360).set_periodic(True).set_enforce_extrema(False)
    """

    def __init__(
        self,
        name: str = "",
        min_value: Optional[float] = None,
        max_value: Optional[float] = None,
        periodic: bool = False,
        enforce_extrema: bool = True,
        unit: str = ""
    ):
        self.id = next(_attribute_ids)
        self.name = name or f"attribute_{self.id}"
        self.min = min_value
        self.max = max_value
        self.periodic = periodic
        self.enforce_extrema = enforce_extrema
        self.unit = unit
        self._listeners: Dict[Any, Callable[["Attribute"], None]] = {}

    @abstractmethod
    def get(self) -> float:
        ...

    @abstractmethod
    def _write(self, value: float) -> None:
        ...

    def set(self, value: float, notify: bool = True) -> None:
        if self.enforce_extrema:
            if self.min is not None and value < self.min:
                value = self.min
            if self.max is not None and value > self.max:
                value = self.max
        self._write(value)
        if notify:
            self._notify()

    def _notify(self) -> None:
        for owner, listener in list(self._listeners.items()):
            try:
                listener(self)
            except Exception as e:
                log.error("Attribute listener failed", attribute=self.name, owner=owner, exception=e)

    # === Listeners ===

    def add_listener(self, owner: Any, listener: Callable[["Attribute"], None]) -> None:
        """Register a change listener; one listener per owner"""
        self._listeners[owner] = listener

    def remove_listener(self, owner: Any) -> None:
        self._listeners.pop(owner, None)

    # === Bounds ===

    def has_min(self) -> bool:
        return self.min is not None

    def has_max(self) -> bool:
        return self.max is not None

    def is_periodic(self) -> bool:
        return self.periodic

    def period(self) -> float:
        if self.min is None or self.max is None:
            return 0.0
        return self.max - self.min

    # === Fluent configuration ===

    def set_min(self, value: float) -> "Attribute":
        self.min = value
        return self

    def set_max(self, value: float) -> "Attribute":
        self.max = value
        return self

    def set_periodic(self, periodic: bool) -> "Attribute":
        self.periodic = periodic
        return self

    def set_enforce_extrema(self, enforce: bool) -> "Attribute":
        self.enforce_extrema = enforce
        return self

    def set_name(self, name: str) -> "Attribute":
        self.name = name
        return self

    def set_unit(self, unit: str) -> "Attribute":
        self.unit = unit
        return self

    def __repr__(self):
        return f"{type(self).__name__}(id={self.id}, name={self.name!r}, value={self.get()!r})"


class ValueAttribute(Attribute):
    """Attribute storing its own value"""

    def __init__(self, value: float = 0.0, **kwargs):
        super().__init__(**kwargs)
        self._value = value

    def get(self) -> float:
        return self._value

    def _write(self, value: float) -> None:
        self._value = value


class FieldAttribute(Attribute):
    """Attribute backed by a named field of a host object"""

    def __init__(self, target: Any, field_name: str, **kwargs):
        kwargs.setdefault("name", field_name)
        super().__init__(**kwargs)
        self.target = target
        self.field_name = field_name

    def get(self) -> float:
        return getattr(self.target, self.field_name)

    def _write(self, value: float) -> None:
        setattr(self.target, self.field_name, value)


class CallbackAttribute(Attribute):
    """Attribute backed by getter/setter callables"""

    def __init__(self, getter: Callable[[], float], setter: Callable[[float], None], **kwargs):
        super().__init__(**kwargs)
        self._getter = getter
        self._setter = setter

    def get(self) -> float:
        return self._getter()

    def _write(self, value: float) -> None:
        self._setter(value)
