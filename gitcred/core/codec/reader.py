import io
import logging
from collections.abc import Iterator

from gitcred.core.errors import DecodeError, MalformedLineError, SourceReadError
from gitcred.core.models.credential import KNOWN_KEYS, Credential
from gitcred.core.ports.stream import ByteSource


class CredentialReader:
    """
    Reads credential records from a byte source, one line at a time.

    A record is a run of ``key=value`` lines ended by an empty line or by
    the end of the source, whichever comes first. Lines are pulled with
    ``readline()`` so nothing past the terminator of the current record is
    consumed: the same reader can be called again to get the next record
    of a continuous stream.

    Each line is split on its first '='. The key must not be empty; the
    value may be empty and may contain more '=' characters. A '\\r' right
    before the line terminator belongs to the terminator. Known keys are
    stored in their dedicated attribute, any other key goes to
    ``Credential.extra`` in first-seen order. When a key is repeated the
    last value wins.

    Any failure (undecodable bytes, malformed line, source error) aborts
    the record: the caller gets the exception, never a partial Credential.

    ``lines_read`` and ``bytes_read`` count everything consumed so far,
    terminators included, across all calls to ``read()``.
    """
    def __init__(self, source: ByteSource, encoding: str = "utf-8") -> None:
        self._source = source
        self._encoding = encoding
        self.lines_read = 0
        self.bytes_read = 0
        self.exhausted = False
        self._logger = logging.getLogger("core.codec.reader")

    def read(self) -> Credential:
        credential = Credential()
        lineno = 0

        while True:
            raw = self._readline()
            if not raw:
                self.exhausted = True
                break

            lineno += 1
            line = self._decode(raw, lineno)
            if not line:
                break

            key, value = self._split(line, lineno)
            self._logger.debug(f"Reading attribute '{key}' at line {lineno}")
            if key in KNOWN_KEYS:
                setattr(credential, key, value)
            else:
                credential.extra[key] = value

        return credential

    def __iter__(self) -> Iterator[Credential]:
        while not self.exhausted:
            start = self.lines_read
            credential = self.read()
            if self.exhausted and self.lines_read == start:
                return
            yield credential

    def _readline(self) -> bytes:
        try:
            raw = self._source.readline()
        except OSError as exc:
            raise SourceReadError(f"Could not read from source: {exc}") from exc

        if raw:
            self.lines_read += 1
            self.bytes_read += len(raw)
        return raw

    def _decode(self, raw: bytes, lineno: int) -> str:
        if raw.endswith(b"\n"):
            raw = raw[:-1]
        if raw.endswith(b"\r"):
            raw = raw[:-1]

        try:
            return raw.decode(self._encoding)
        except UnicodeDecodeError as exc:
            raise DecodeError(lineno, raw, self._encoding) from exc

    @staticmethod
    def _split(line: str, lineno: int) -> tuple[str, str]:
        key, sep, value = line.partition("=")
        if not sep:
            raise MalformedLineError(lineno, line, "missing '=' separator")
        if not key:
            raise MalformedLineError(lineno, line, "empty key")
        return key, value


def parse(source: ByteSource, encoding: str = "utf-8") -> Credential:
    """Read one credential record from ``source``."""
    return CredentialReader(source, encoding).read()


def loads(data: bytes | str, encoding: str = "utf-8") -> Credential:
    if isinstance(data, str):
        try:
            data = data.encode(encoding)
        except UnicodeEncodeError as exc:
            lineno = data.count("\n", 0, exc.start) + 1
            line = data.split("\n")[lineno - 1]
            raise DecodeError(lineno, line, encoding) from exc
    return parse(io.BytesIO(data), encoding)


def iter_credentials(source: ByteSource, encoding: str = "utf-8") -> Iterator[Credential]:
    """
    Yield every record of a continuous stream until it is exhausted.

    A trailing empty block at the end of the stream yields nothing.
    """
    return iter(CredentialReader(source, encoding))
