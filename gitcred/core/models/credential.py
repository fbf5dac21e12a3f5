from collections.abc import Iterator
from dataclasses import dataclass, field, fields
from typing import Any

from gitcred.core.errors import InvalidKeyError, InvalidValueError

KNOWN_KEYS: tuple[str, ...] = (
    "protocol",
    "host",
    "path",
    "username",
    "password",
    "url",
)
"""
Attributes git itself understands, in the order they are written.
"""


def check_key(key: str) -> None:
    """Raise InvalidKeyError if ``key`` cannot appear on the left of a wire line."""
    if not key:
        raise InvalidKeyError(key, "key is empty")
    if "=" in key:
        raise InvalidKeyError(key, "key contains '='")
    if "\n" in key:
        raise InvalidKeyError(key, "key contains a newline")


def check_value(key: str, value: str) -> None:
    if "\n" in value:
        raise InvalidValueError(key)
    # a CR before the terminator is read back as part of the terminator
    if value.endswith("\r"):
        raise InvalidValueError(key, f"value of {key!r} ends with a carriage return")


@dataclass(eq=False)
class Credential:
    """
    One credential exchange between git and a helper.

    Every known attribute is optional: ``None`` means the attribute was
    never seen, while ``""`` means it was sent with an empty value. The two
    are written differently (no line at all versus ``key=``).

    Keys git does not know about (``wwwauth[]``, ``oauth_refresh_token``,
    ``capability[]``...) live in ``extra``, in the order they were first
    seen, and are written back after the known attributes.
    """
    protocol: str | None = None
    """
    The protocol over which the credential will be used, e.g. "https".
    """

    host: str | None = None
    """
    The remote hostname, including the port number if one was specified.
    """

    path: str | None = None
    """
    The path with which the credential will be used, e.g. the repository
    path on the server.
    """

    username: str | None = None
    password: str | None = None

    url: str | None = None
    """
    The whole remote url. Kept as opaque text: no parsing or escaping.
    """

    extra: dict[str, str] = field(default_factory=dict)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Credential):
            return NotImplemented
        return (
            all(getattr(self, k) == getattr(other, k) for k in KNOWN_KEYS)
            and list(self.extra.items()) == list(other.extra.items())
        )

    def __getitem__(self, key: str) -> str:
        if key in KNOWN_KEYS:
            value = getattr(self, key)
            if value is None:
                raise KeyError(key)
            return value
        return self.extra[key]

    def __setitem__(self, key: str, value: str) -> None:
        check_key(key)
        if key in KNOWN_KEYS:
            setattr(self, key, value)
        else:
            self.extra[key] = value

    def __delitem__(self, key: str) -> None:
        if key in KNOWN_KEYS:
            if getattr(self, key) is None:
                raise KeyError(key)
            setattr(self, key, None)
        else:
            del self.extra[key]

    def __contains__(self, key: object) -> bool:
        if key in KNOWN_KEYS:
            return getattr(self, key) is not None  # type: ignore[arg-type]
        return key in self.extra

    def get(self, key: str, default: Any = None) -> Any:
        try:
            return self[key]
        except KeyError:
            return default

    def items(self) -> Iterator[tuple[str, str]]:
        """Yield present pairs in wire order: known attributes, then extras."""
        for key in KNOWN_KEYS:
            value = getattr(self, key)
            if value is not None:
                yield key, value
        yield from self.extra.items()

    def to_dict(self) -> dict[str, str]:
        return dict(self.items())

    def copy(self) -> "Credential":
        values = {f.name: getattr(self, f.name) for f in fields(self) if f.name != "extra"}
        return Credential(**values, extra=dict(self.extra))

    def is_empty(self) -> bool:
        return next(self.items(), None) is None

    def validate(self) -> None:
        """
        Check every pair against the wire invariants.

        Raises:
            InvalidKeyError: an extra key is empty, contains '=' or a
                newline, or shadows a known attribute.
            InvalidValueError: a value contains a newline.
        """
        for key in KNOWN_KEYS:
            value = getattr(self, key)
            if value is not None:
                check_value(key, value)
        for key, value in self.extra.items():
            check_extra(key, value)


def check_extra(key: str, value: str) -> None:
    check_key(key)
    if key in KNOWN_KEYS:
        raise InvalidKeyError(key, "reserved for the known attribute")
    check_value(key, value)
