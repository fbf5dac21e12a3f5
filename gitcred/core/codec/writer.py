import io
import logging

from gitcred.core.errors import InvalidValueError, SinkWriteError
from gitcred.core.models.credential import KNOWN_KEYS, Credential, check_extra, check_value
from gitcred.core.ports.stream import ByteSink


class CredentialWriter:
    """
    Writes credential records to a byte sink in a single pass.

    Known attributes come first in canonical order, skipping the absent
    ones, then the extra pairs in insertion order, then one blank line.
    Every line is checked right before it is written, so an invalid pair
    aborts the record after the lines preceding it already reached the
    sink. The writer never retracts what it wrote.
    """
    def __init__(self, sink: ByteSink, encoding: str = "utf-8") -> None:
        self._sink = sink
        self._encoding = encoding
        self._logger = logging.getLogger("core.codec.writer")

    def write(self, credential: Credential) -> None:
        for key in KNOWN_KEYS:
            value = getattr(credential, key)
            if value is None:
                continue
            check_value(key, value)
            self._writeline(key, value)

        for key, value in credential.extra.items():
            check_extra(key, value)
            self._writeline(key, value)

        self._send(b"\n")
        self._flush()

    def _writeline(self, key: str, value: str) -> None:
        self._logger.debug(f"Writing attribute '{key}'")
        try:
            line = f"{key}={value}\n".encode(self._encoding)
        except UnicodeEncodeError as exc:
            raise InvalidValueError(key, f"cannot encode {key!r} as {self._encoding}") from exc
        self._send(line)

    def _send(self, data: bytes) -> None:
        try:
            self._sink.write(data)
        except OSError as exc:
            raise SinkWriteError(f"Could not write to sink: {exc}") from exc

    def _flush(self) -> None:
        flush = getattr(self._sink, "flush", None)
        if flush is None:
            return
        try:
            flush()
        except OSError as exc:
            raise SinkWriteError(f"Could not flush sink: {exc}") from exc


def serialize(credential: Credential, sink: ByteSink, encoding: str = "utf-8") -> None:
    """Write ``credential`` to ``sink`` followed by the blank terminator line."""
    CredentialWriter(sink, encoding).write(credential)


def dumps(credential: Credential, encoding: str = "utf-8") -> bytes:
    buffer = io.BytesIO()
    serialize(credential, buffer, encoding)
    return buffer.getvalue()
