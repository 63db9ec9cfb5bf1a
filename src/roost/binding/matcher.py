"""Positional matcher — zips route params with handler binding slots.

Matching is by position only: the first route parameter goes to the
first slot, and so on. Names never participate, so a handler may call
its arguments whatever it likes.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from roost.binding.slots import BindingSlot
from roost.errors import ConfigurationError
from roost.routing.params import RouteParam

_UNRESOLVED: Any = object()


@dataclass(slots=True)
class PendingBinding:
    """One route param paired with its slot, for the duration of a request.

    ``resolved`` starts out unset for model slots and is filled in by the
    resolver; raw slots are resolved to their string value immediately.
    """

    param: RouteParam
    value: str
    slot: BindingSlot
    resolved: Any = _UNRESOLVED

    @property
    def is_resolved(self) -> bool:
        return self.resolved is not _UNRESOLVED


def match_bindings(
    params: Sequence[RouteParam],
    values: Sequence[str],
    slots: Sequence[BindingSlot],
    *,
    path: str = "",
) -> list[PendingBinding]:
    """Pair each route param (and its raw value) with its slot.

    Raises ``ConfigurationError`` when the slot and param counts differ,
    or when a scoped param follows a raw slot (there is no instance to
    scope the lookup to).
    """
    where = f" for route {path!r}" if path else ""
    if len(slots) != len(params):
        msg = (
            f"Binding mismatch{where}: the route declares {len(params)} "
            f"parameter(s) ({', '.join(p.literal for p in params) or 'none'}) "
            f"but the handler binds {len(slots)} slot(s) "
            f"({', '.join(s.describe() for s in slots) or 'none'})."
        )
        raise ConfigurationError(msg)
    if len(values) != len(params):
        msg = f"Binding mismatch{where}: expected {len(params)} path value(s), got {len(values)}."
        raise ConfigurationError(msg)

    bindings: list[PendingBinding] = []
    for index, (param, value, slot) in enumerate(zip(params, values, slots, strict=True)):
        if param.scoped and (index == 0 or not slots[index - 1].is_model):
            msg = (
                f"Scoped parameter {param.literal!r}{where} must directly follow a "
                "model-bound parameter."
            )
            raise ConfigurationError(msg)
        if slot.is_model:
            bindings.append(PendingBinding(param, value, slot))
        else:
            bindings.append(PendingBinding(param, value, slot, resolved=value))
    return bindings
