"""Binding metadata registry.

Maps a handler (by identity) to its ordered binding slots. Written during
setup, frozen together with the app, then only read — concurrent
requests share it without locks.

Thread safety:
    Registration happens at import/setup time on one thread. After
    ``freeze()`` the underlying dict is never mutated again.
"""

from collections.abc import Callable, Iterator, Sequence
from typing import Any

from roost.binding.slots import BindingSlot, slots_for
from roost.errors import ConfigurationError


def _handler_name(handler: Callable[..., Any]) -> str:
    return getattr(handler, "__qualname__", None) or getattr(handler, "__name__", repr(handler))


class BindingRegistry:
    """Handler -> binding slots, frozen after setup.

    Usage::

        registry = BindingRegistry()
        registry.register(show_comment, slots_for(Post, Comment))
        registry.freeze()
        registry.lookup(show_comment)   # (BindingSlot(0, Post), BindingSlot(1, Comment))
    """

    __slots__ = ("_entries", "_frozen")

    def __init__(self) -> None:
        self._entries: dict[Callable[..., Any], tuple[BindingSlot, ...]] = {}
        self._frozen = False

    def register(self, handler: Callable[..., Any], slots: Sequence[BindingSlot]) -> None:
        """Record the slots for *handler*.

        Registering the same slots twice is a no-op. Registering
        different slots for an already-bound handler is an error.
        """
        if self._frozen:
            msg = "Cannot register bindings after the app has frozen."
            raise RuntimeError(msg)

        slots = tuple(slots)
        for expected, slot in enumerate(slots):
            if slot.position != expected:
                msg = (
                    f"Binding slots for {_handler_name(handler)} must be in position "
                    f"order starting at 0; slot {expected} has position {slot.position}."
                )
                raise ConfigurationError(msg)

        existing = self._entries.get(handler)
        if existing is not None and existing != slots:
            msg = (
                f"{_handler_name(handler)} is already bound to "
                f"({', '.join(s.describe() for s in existing)}); "
                f"cannot rebind to ({', '.join(s.describe() for s in slots)})."
            )
            raise ConfigurationError(msg)
        self._entries[handler] = slots

    def bind(self, handler: Callable[..., Any], *targets: Any) -> None:
        """Shorthand for ``register(handler, slots_for(*targets))``."""
        self.register(handler, slots_for(*targets))

    def lookup(self, handler: Callable[..., Any]) -> tuple[BindingSlot, ...] | None:
        """The slots registered for *handler*, or ``None`` if it isn't bound."""
        return self._entries.get(handler)

    def freeze(self) -> None:
        """Make the registry read-only."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __contains__(self, handler: object) -> bool:
        return handler in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[tuple[Callable[..., Any], tuple[BindingSlot, ...]]]:
        return iter(self._entries.items())
