"""
Modifiers - what a transition does to its attribute(s)

A modifier knows which attribute ids it targets, what value it aims at and
how to blend that aim into the live value at a given weight:

    weight < 0   -> no effect
    weight >= 1  -> hard assignment of the aimed value
    otherwise    -> (1 - weight) * current + weight * aim

Attributes are held through weak references; a modifier whose attribute
was disposed targets nothing and mixing it does nothing. mix() may be
restricted to a subset of target ids; the others are left untouched.
"""

import weakref
from abc import ABC, abstractmethod
from typing import Collection, List, Optional, Sequence, Union

from models.attribute import Attribute
from models.enums import LogCategory
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.ENGINE)


def _dead_ref():
    return None


def _weak(attribute: Optional[Attribute]):
    return weakref.ref(attribute) if attribute is not None else _dead_ref


def blend(current: float, aim: float, weight: float) -> Optional[float]:
    """Blend rule shared by every modifier; None means leave the attribute alone"""
    if weight < 0:
        return None
    if weight >= 1:
        return aim
    return (1 - weight) * current + weight * aim


class Modifier(ABC):
    """Capability interface of everything the transition engine can mix"""

    @abstractmethod
    def target_ids(self) -> List[int]:
        ...

    @abstractmethod
    def mix(self, weight: float, only: Optional[Collection[int]] = None) -> None:
        ...

    @abstractmethod
    def freeze_to_current(self) -> "Modifier":
        """Equivalent modifier aiming at the attribute's present value"""

    @abstractmethod
    def freeze_to_aimed(self) -> "Modifier":
        """Equivalent modifier aiming at the current target, detached from later changes"""

    def is_dynamic(self) -> bool:
        return False

    def is_persistent(self) -> bool:
        return False


class AttributeModifier(Modifier):
    """Modifier acting on a single attribute"""

    def __init__(self, attribute: Optional[Attribute]):
        self._attribute_ref = _weak(attribute)
        self.persistent = False

    @property
    def attribute(self) -> Optional[Attribute]:
        return self._attribute_ref()

    @abstractmethod
    def aimed_value(self) -> float:
        ...

    def target_ids(self) -> List[int]:
        attr = self.attribute
        return [attr.id] if attr is not None else []

    def mix(self, weight: float, only: Optional[Collection[int]] = None) -> None:
        attr = self.attribute
        if attr is None:
            log.debug("Mix skipped, attribute disposed", modifier=type(self).__name__)
            return
        if only is not None and attr.id not in only:
            return
        value = blend(attr.get(), self.aimed_value(), weight)
        if value is not None:
            attr.set(value)

    def freeze_to_current(self) -> "ValueModifier":
        attr = self.attribute
        return ValueModifier(attr, attr.get() if attr is not None else 0.0)

    def freeze_to_aimed(self) -> "ValueModifier":
        return ValueModifier(self.attribute, self.aimed_value()).set_persistence(self.persistent)

    def set_persistence(self, persistent: bool) -> "AttributeModifier":
        self.persistent = persistent
        return self

    def is_persistent(self) -> bool:
        return self.persistent


class ValueModifier(AttributeModifier):
    """Aims at a constant value"""

    def __init__(self, attribute: Optional[Attribute], value: float):
        super().__init__(attribute)
        self.value = value

    def aimed_value(self) -> float:
        return self.value

    def __repr__(self):
        attr = self.attribute
        return f"ValueModifier({attr.name if attr else None!r} -> {self.value!r})"


class GroupValueModifier(Modifier):
    """
    One blend rule over several attributes, one aimed value per attribute

    Added to the engine as a single timed entry: it shows up in the sequence
    of every target and is ticked once per apply.
    """

    def __init__(self, attributes: Sequence[Attribute], values: Union[float, Sequence[float]]):
        if isinstance(values, (int, float)):
            values = [values] * len(attributes)
        if len(values) != len(attributes):
            raise ValueError(f"Expected {len(attributes)} values, got {len(values)}")
        self._refs = [_weak(a) for a in attributes]
        self.values = list(values)
        self.persistent = False

    def _live(self):
        for ref, value in zip(self._refs, self.values):
            attr = ref()
            if attr is not None:
                yield attr, value

    def target_ids(self) -> List[int]:
        return [attr.id for attr, _ in self._live()]

    def mix(self, weight: float, only: Optional[Collection[int]] = None) -> None:
        for attr, aim in self._live():
            if only is not None and attr.id not in only:
                continue
            value = blend(attr.get(), aim, weight)
            if value is not None:
                attr.set(value)

    def freeze_to_current(self) -> "GroupValueModifier":
        live = list(self._live())
        return GroupValueModifier([a for a, _ in live], [a.get() for a, _ in live])

    def freeze_to_aimed(self) -> "GroupValueModifier":
        live = list(self._live())
        frozen = GroupValueModifier([a for a, _ in live], [v for _, v in live])
        return frozen.set_persistence(self.persistent)

    def set_persistence(self, persistent: bool) -> "GroupValueModifier":
        self.persistent = persistent
        return self

    def is_persistent(self) -> bool:
        return self.persistent
