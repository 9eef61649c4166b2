"""
Error types raised by the randomness core.

Every error carries a small negative code so callers (the command line
tool, for example) can report a numeric status.
"""


class PrngMiniError(Exception):
    """Base class for every error raised by prng-mini."""

    code = -1


class InvalidArgument(PrngMiniError, ValueError):
    """A precondition was violated by the caller (bad length, range, size...)."""

    code = -1


class AllocationFailure(PrngMiniError, MemoryError):
    """An output buffer could not be allocated."""

    code = -2


class EntropySourceUnavailable(PrngMiniError):
    """The operating system random device or API could not be used."""

    code = -3


class EntropyReadIncomplete(PrngMiniError):
    """The random device returned fewer bytes than requested."""

    code = -4

    def __init__(self, requested: int, received: int):
        super().__init__(
            f"Entropy read incomplete: requested {requested} bytes, got {received}"
        )
        self.requested = requested
        self.received = received


class ChecksumMismatch(PrngMiniError):
    """
    A generated license key does not add up to the requested signature.

    This is an internal invariant violation: seeing it always means a bug
    in the generator, never bad user input.
    """

    code = -5
