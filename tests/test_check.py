"""Tests for roost.binding.check — startup validation of bindings."""

from dataclasses import dataclass

import pytest

from roost.app import App
from roost.binding import BindingRegistry, Raw, check_bindings
from roost.binding.check import BindingIssue, check_route, raise_for_issues
from roost.config import AppConfig
from roost.data import HasMany, table
from roost.errors import ConfigurationError
from roost.routing.route import Route
from roost.testing import TestClient


@table("posts", relations={"comments": HasMany(lambda: Comment, "post_id")})
@dataclass(frozen=True, slots=True)
class Post:
    id: int
    slug: str


@table("comments")
@dataclass(frozen=True, slots=True)
class Comment:
    id: int
    post_id: int


@table("notes")
@dataclass(frozen=True, slots=True)
class Note:
    id: int

    def find_for_request(self, request, param, value):
        return self


def handler(request, *args):
    return "ok"


def _check(path: str, *targets: type) -> list[BindingIssue]:
    registry = BindingRegistry()
    registry.bind(handler, *targets)
    return check_route(Route(path, handler, frozenset({"GET"})), registry)


class TestCheckRoute:
    def test_sound_route(self) -> None:
        assert _check("/posts/:post/comments/:>comment", Post, Comment) == []

    def test_unbound_route_skipped(self) -> None:
        route = Route("/posts/:post", handler, frozenset({"GET"}))
        assert check_route(route, BindingRegistry()) == []

    def test_count_mismatch(self) -> None:
        (issue,) = _check("/posts/:post/comments/:comment", Post)
        assert issue.path == "/posts/:post/comments/:comment"
        assert issue.handler == "handler"
        assert "Binding mismatch" in issue.message

    def test_unknown_lookup_key(self) -> None:
        (issue,) = _check("/posts/:post(title)", Post)
        assert "title" in issue.message

    def test_missing_relationship(self) -> None:
        (issue,) = _check("/comments/:comment/posts/:>post", Comment, Post)
        assert "no relationship" in issue.message

    def test_scoped_after_raw(self) -> None:
        (issue,) = _check("/:version/posts/:>post", Raw, Post)
        assert "model-bound" in issue.message

    def test_bad_model_finder(self) -> None:
        (issue,) = _check("/notes/:note", Note)
        assert "classmethod or staticmethod" in issue.message

    def test_several_issues_collected(self) -> None:
        issues = _check("/posts/:post(title)/comments/:>comment(text)", Post, Comment)
        assert len(issues) == 2

    def test_issue_str(self) -> None:
        issue = BindingIssue("/p/:post", "show", "broken")
        assert str(issue) == "/p/:post (show): broken"


class TestCheckBindings:
    def test_across_routes(self) -> None:
        registry = BindingRegistry()
        registry.bind(handler, Post)
        routes = [
            Route("/posts/:post", handler, frozenset({"GET"})),
            Route("/posts/:post/:extra", handler, frozenset({"GET"})),
        ]
        issues = check_bindings(routes, registry)
        assert [i.path for i in issues] == ["/posts/:post/:extra"]

    def test_raise_for_issues(self) -> None:
        raise_for_issues([])
        with pytest.raises(ConfigurationError, match="1 route binding problem"):
            raise_for_issues([BindingIssue("/p", "h", "bad")])


class TestAppCheck:
    def test_returns_issues_without_freezing(self) -> None:
        app = App()

        @app.route("/posts/:post/:extra", bind=(Post,))
        def show(request, post):
            return "ok"

        issues = app.check()
        assert len(issues) == 1
        assert app._frozen is False

    def test_clean_app(self) -> None:
        app = App(AppConfig(validate_bindings=True))

        @app.route("/posts/:post", bind=(Post,))
        def show(request, post):
            return "ok"

        assert app.check() == []
        app._ensure_frozen()
        assert app._frozen is True


@table("pets")
@dataclass(frozen=True, slots=True)
class Pet:
    id: int
    owner_id: int


@table("owners")
@dataclass(frozen=True, slots=True)
class Owner:
    id: int

    @staticmethod
    def find_for_request(request, param, value):
        return Owner(id=int(value))

    def find_related_for_request(self, request, param, value):
        return Pet(id=len(value), owner_id=self.id)


class TestRelationshipOverride:
    def test_override_owns_its_lookup_key(self) -> None:
        assert _check("/owners/:owner/pets/:>pet(nickname)", Owner, Pet) == []

    def test_override_stands_in_for_missing_relationship(self) -> None:
        assert _check("/owners/:owner/pets/:>pet", Owner, Pet) == []

    async def test_app_freezes_and_serves(self) -> None:
        app = App()

        @app.route("/owners/:owner/pets/:>pet(nickname)", bind=(Owner, Pet))
        def show(request, owner, pet):
            return f"{owner.id}:{pet.id}"

        assert app.check() == []
        async with TestClient(app) as client:
            response = await client.get("/owners/4/pets/rex")
        assert response.status == 200
        assert response.text == "4:3"
