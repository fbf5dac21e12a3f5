class CredentialError(Exception):
    """Base error for everything raised by the credential codec."""


class ParseError(CredentialError):
    """Raised when an input block cannot be turned into a Credential."""


class DecodeError(ParseError):
    """
    A line is not valid text in the expected encoding, or an in-memory
    string cannot be encoded to it.

    The message names the line number and the key only. The undecodable
    line itself is kept in ``raw`` for callers that need it.
    """
    def __init__(self, lineno: int, raw: bytes | str, encoding: str) -> None:
        self.lineno = lineno
        self.raw = raw
        self.encoding = encoding
        key = _key_of(raw)
        where = f"value of {key!r}" if key else "line"
        super().__init__(f"line {lineno}: cannot convert {where} with {encoding}")


def _key_of(raw: bytes | str) -> str | None:
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")
    key, sep, _ = raw.partition("=")
    return key if sep and key else None


class MalformedLineError(ParseError):
    """
    A non-empty line has no '=' separator or an empty key.

    The offending line and its 1-based position inside the record are kept
    so that callers can report them. The message carries only the position:
    a malformed line may well be a secret.
    """
    def __init__(self, lineno: int, line: str, reason: str) -> None:
        self.lineno = lineno
        self.line = line
        self.reason = reason
        super().__init__(f"line {lineno}: {reason}")


class SourceReadError(ParseError):
    """The input source failed while more lines were expected."""


class WriteError(CredentialError):
    """Raised when a Credential cannot be written to a sink."""


class InvalidValueError(WriteError):
    def __init__(self, key: str, message: str | None = None) -> None:
        self.key = key
        super().__init__(message or f"value of {key!r} contains a newline")


class InvalidKeyError(InvalidValueError, ValueError):
    """The key itself cannot be represented on the wire."""
    def __init__(self, key: str, reason: str) -> None:
        self.reason = reason
        super().__init__(key, f"invalid key {key!r}: {reason}")


class SinkWriteError(WriteError):
    """The output sink refused bytes."""
