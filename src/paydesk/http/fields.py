"""Read-only ``name=value`` fields: headers, query strings, form bodies.

All three arrive as ordered pairs in which a name may repeat. ``Fields``
keeps the pairs as received and answers a lookup with the first value.
"""

from collections.abc import Iterable, Iterator, Mapping
from urllib.parse import parse_qsl

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class Fields(Mapping[str, str]):
    """Ordered ``(name, value)`` pairs looked up by name.

    With ``fold_case`` names compare case-insensitively, as header names
    do. ``get_all`` returns every value for a repeated name.
    """

    __slots__ = ("_fold", "_pairs")

    def __init__(self, pairs: Iterable[tuple[str, str]] = (), *, fold_case: bool = False) -> None:
        self._fold = fold_case
        self._pairs = tuple((self._key(name), value) for name, value in pairs)

    @classmethod
    def from_headers(cls, raw: Iterable[tuple[bytes, bytes]]) -> "Fields":
        """Decode the ASGI ``headers`` list."""
        decoded = ((name.decode("latin-1"), value.decode("latin-1")) for name, value in raw)
        return cls(decoded, fold_case=True)

    @classmethod
    def from_query(cls, query_string: bytes) -> "Fields":
        """Parse the ASGI ``query_string``; blank values are kept as ``""``."""
        return cls(parse_qsl(query_string.decode("latin-1"), keep_blank_values=True))

    def _key(self, name: str) -> str:
        return name.lower() if self._fold else name

    def __getitem__(self, name: str) -> str:
        wanted = self._key(name)
        for key, value in self._pairs:
            if key == wanted:
                return value
        raise KeyError(name)

    def __iter__(self) -> Iterator[str]:
        return iter(dict.fromkeys(key for key, _ in self._pairs))

    def __len__(self) -> int:
        return len(dict.fromkeys(key for key, _ in self._pairs))

    def __repr__(self) -> str:
        return f"Fields({list(self._pairs)!r})"

    def get_all(self, name: str) -> list[str]:
        wanted = self._key(name)
        return [value for key, value in self._pairs if key == wanted]


def parse_form(body: bytes, content_type: str | None) -> Fields:
    """Parse a URL-encoded form body.

    A missing Content-Type is read as a form. Raises ``ValueError`` for
    any other media type, or when the body is not UTF-8.
    """
    media_type = (content_type or FORM_CONTENT_TYPE).partition(";")[0].strip().lower()
    if media_type != FORM_CONTENT_TYPE:
        msg = f"Unsupported form content type: {content_type!r}"
        raise ValueError(msg)
    return Fields(parse_qsl(body.decode("utf-8"), keep_blank_values=True))
