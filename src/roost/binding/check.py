"""Startup validation of route/handler bindings.

Runs the same structural rules the middleware enforces per request, but
against every bound route at once, before the first request is served.
Used by ``App`` at freeze time (``AppConfig.validate_bindings``) and by
``roost check``.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from roost.binding.matcher import match_bindings
from roost.binding.registry import BindingRegistry
from roost.binding.resolver import find_relation, model_finder, resolve_lookup_key
from roost.errors import ConfigurationError
from roost.routing.route import Route


@dataclass(frozen=True, slots=True)
class BindingIssue:
    """One wiring problem between a route and its handler's bindings."""

    path: str
    handler: str
    message: str

    def __str__(self) -> str:
        return f"{self.path} ({self.handler}): {self.message}"


def check_route(route: Route, registry: BindingRegistry) -> list[BindingIssue]:
    """Validate one route; returns an empty list when it's sound or unbound."""
    slots = registry.lookup(route.handler)
    if slots is None:
        return []

    handler = getattr(route.handler, "__qualname__", repr(route.handler))
    issues: list[BindingIssue] = []

    def issue(exc: ConfigurationError) -> None:
        issues.append(BindingIssue(route.path, handler, str(exc)))

    try:
        bindings = match_bindings(route.params, [""] * len(route.params), slots, path=route.path)
    except ConfigurationError as exc:
        issue(exc)
        return issues

    for index, binding in enumerate(bindings):
        if not binding.slot.is_model:
            continue
        model = binding.slot.target
        param = binding.param
        # Same priority as LookupResolver: an override owns its lookup key.
        try:
            if model_finder(model) is not None:
                continue
            if param.scoped:
                parent = bindings[index - 1].slot.target
                if callable(getattr(parent, "find_related_for_request", None)):
                    continue
                find_relation(parent, param, model)
            resolve_lookup_key(model, param)
        except ConfigurationError as exc:
            issue(exc)
    return issues


def check_bindings(routes: Iterable[Route], registry: BindingRegistry) -> list[BindingIssue]:
    """Validate every bound route in *routes*."""
    issues: list[BindingIssue] = []
    for route in routes:
        issues.extend(check_route(route, registry))
    return issues


def raise_for_issues(issues: list[BindingIssue]) -> None:
    """Raise one ``ConfigurationError`` listing every issue, if any."""
    if not issues:
        return
    lines = "\n".join(f"  - {i}" for i in issues)
    msg = f"{len(issues)} route binding problem(s):\n{lines}"
    raise ConfigurationError(msg)
