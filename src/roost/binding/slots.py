"""Binding slots — what each handler argument after ``request`` receives.

A slot either carries a model type (the path value is looked up in the
database) or the ``Raw`` marker (the path string is passed through)::

    slots_for(Raw, Post, Comment)
    # (BindingSlot(0, Raw), BindingSlot(1, Post), BindingSlot(2, Comment))

Slots are positional. The n-th slot receives the n-th route parameter;
argument names play no part.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, final

from roost.data.model import is_model
from roost.errors import ConfigurationError


@final
class Raw:
    """Slot marker: pass the route parameter's string value through unchanged."""

    def __init__(self) -> None:
        msg = "Raw is a marker; use the class itself, e.g. bind=(Raw, Post)."
        raise TypeError(msg)


class SlotKind(Enum):
    MODEL = "model"
    RAW = "raw"


@dataclass(frozen=True, slots=True)
class BindingSlot:
    """One bindable handler argument.

    Attributes:
        position: Zero-based ordinal, not counting the request argument.
        target: A ``@table`` model class, or ``Raw``.
    """

    position: int
    target: type

    def __post_init__(self) -> None:
        if self.position < 0:
            msg = f"Binding slot position must be >= 0, got {self.position}."
            raise ConfigurationError(msg)
        if self.target is not Raw and not is_model(self.target):
            name = getattr(self.target, "__name__", repr(self.target))
            msg = (
                f"Binding slot {self.position} targets {name}, which is neither "
                "Raw nor a model registered with @table(...)."
            )
            raise ConfigurationError(msg)

    @property
    def kind(self) -> SlotKind:
        return SlotKind.RAW if self.target is Raw else SlotKind.MODEL

    @property
    def is_model(self) -> bool:
        return self.target is not Raw

    def describe(self) -> str:
        return "Raw" if self.target is Raw else self.target.__name__


def slots_for(*targets: Any) -> tuple[BindingSlot, ...]:
    """Build an ordered slot tuple from model classes and ``Raw`` markers."""
    return tuple(BindingSlot(position, target) for position, target in enumerate(targets))
