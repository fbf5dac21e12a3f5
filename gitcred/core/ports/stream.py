from typing import Protocol


class ByteSource(Protocol):
    """
    Defines the input side of the credential exchange.

    Anything exposing a binary ``readline()`` satisfies it: ``sys.stdin.buffer``,
    ``io.BytesIO``, ``socket.makefile("rb")``. Blocking behaviour and timeouts
    are entirely the source's business.
    """

    def readline(self) -> bytes:
        """Return the next line including its terminator, or b"" at end of stream."""


class ByteSink(Protocol):
    """
    Defines the output side of the credential exchange.

    Implementations raise OSError when they refuse bytes.
    """

    def write(self, data: bytes) -> int | None:
        """Write a chunk of bytes."""
