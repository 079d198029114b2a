"""Error taxonomy shared by all modules.

Every domain exception raised by a Service Layer derives from one of
these three bases.  The API layer maps them to HTTP responses; the
services themselves stay transport-agnostic.
"""

from __future__ import annotations


class InvalidArgument(Exception):
    """Malformed or missing input, detected before any storage access."""


class NotFound(Exception):
    """A referenced entity does not exist."""


class InternalFailure(Exception):
    """A storage read/write failed for reasons unrelated to the input.

    The message stays generic; the original cause is logged where
    it is caught.
    """
