"""Route model binding — path values in, model instances out.

Declare which handler arguments are models, in order::

    @app.route("/posts/:post/comments/:>comment(code)", bind=(Post, Comment))
    async def show(request, post: Post, comment: Comment):
        ...

Pieces:
    BindingRegistry   -- handler -> ordered BindingSlot tuple, frozen at startup
    match_bindings    -- positional pairing of route params and slots
    LookupResolver    -- model override / relationship override / key lookup
    BindingMiddleware -- runs the above per request, strictly in slot order
    check_bindings    -- the same rules, checked for every route at startup
"""

from roost.binding.check import BindingIssue, check_bindings
from roost.binding.matcher import PendingBinding, match_bindings
from roost.binding.middleware import BindingMiddleware
from roost.binding.registry import BindingRegistry
from roost.binding.resolver import LookupResolver, resolve_lookup_key
from roost.binding.slots import BindingSlot, Raw, SlotKind, slots_for

__all__ = [
    "BindingIssue",
    "BindingMiddleware",
    "BindingRegistry",
    "BindingSlot",
    "LookupResolver",
    "PendingBinding",
    "Raw",
    "SlotKind",
    "check_bindings",
    "match_bindings",
    "resolve_lookup_key",
    "slots_for",
]
