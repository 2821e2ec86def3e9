"""
Core Errors

Failure taxonomy for pair resolution. A cache miss is not an error and
has no class here; the cache step simply reports nothing found.
"""


class PairDirectoryError(Exception):
    """Base class for recoverable directory failures"""


class SnapshotUnavailable(PairDirectoryError):
    """Local snapshot could not be read or parsed"""


class RemoteFetchFailed(PairDirectoryError):
    """Remote exchange returned an error, a bad status or a malformed body"""


class MalformedRecord(PairDirectoryError):
    """A single upstream entry has no usable symbol or display name"""
