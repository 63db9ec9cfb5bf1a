"""Read-only multi-value mappings for request headers and query strings.

Both keep every ``(key, value)`` pair in arrival order. Item access
returns the first value; ``get_list`` returns all of them.
"""

from collections.abc import Iterable, Iterator, Mapping
from urllib.parse import parse_qsl


class MultiMap(Mapping[str, str]):
    __slots__ = ("_pairs",)

    def __init__(self, pairs: Iterable[tuple[str, str]] = ()) -> None:
        self._pairs = tuple(pairs)

    def _key(self, key: str) -> str:
        return key

    def __getitem__(self, key: str) -> str:
        wanted = self._key(key)
        for name, value in self._pairs:
            if name == wanted:
                return value
        raise KeyError(key)

    def __iter__(self) -> Iterator[str]:
        return iter(dict.fromkeys(name for name, _ in self._pairs))

    def __len__(self) -> int:
        return len(dict.fromkeys(name for name, _ in self._pairs))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._pairs)!r})"

    def get_list(self, key: str) -> list[str]:
        wanted = self._key(key)
        return [value for name, value in self._pairs if name == wanted]


class Headers(MultiMap):
    """Request headers from ASGI byte pairs; names are case-insensitive."""

    __slots__ = ()

    def __init__(self, raw: Iterable[tuple[bytes, bytes]] = ()) -> None:
        super().__init__((n.decode("latin-1").lower(), v.decode("latin-1")) for n, v in raw)

    def _key(self, key: str) -> str:
        return key.lower()


class QueryParams(MultiMap):
    """Decoded query string parameters; blank values are kept."""

    __slots__ = ("query_string",)

    def __init__(self, query_string: bytes = b"") -> None:
        self.query_string = query_string
        super().__init__(parse_qsl(query_string.decode("latin-1"), keep_blank_values=True))
