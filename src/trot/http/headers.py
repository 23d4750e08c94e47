"""Read-only, case-insensitive request headers.

Built once from the raw ASGI byte pairs; names are folded to lower case.
"""

from collections.abc import Iterable, Iterator, Mapping


class Headers(Mapping[str, str]):
    """Case-insensitive header mapping.

    ``headers["Host"]`` returns the first value; ``get_list`` returns all
    of them in the order they arrived.
    """

    __slots__ = ("_values",)

    def __init__(self, raw: Iterable[tuple[bytes, bytes]] = ()) -> None:
        values: dict[str, list[str]] = {}
        for name, value in raw:
            values.setdefault(name.decode("latin-1").lower(), []).append(
                value.decode("latin-1")
            )
        self._values = values

    @classmethod
    def from_dict(cls, headers: Mapping[str, str]) -> "Headers":
        return cls((k.encode("latin-1"), v.encode("latin-1")) for k, v in headers.items())

    def __getitem__(self, key: str) -> str:
        return self._values[key.lower()][0]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Headers({dict(self.items())!r})"

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        return list(self._values.get(key.lower(), ()))
