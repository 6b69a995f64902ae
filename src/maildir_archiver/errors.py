"""Exceptions raised by Maildir Archiver."""


class ArchiverError(Exception):
    """Base class for all archiver failures."""


class StoreError(ArchiverError):
    """The Maildir could not be listed or a message could not be deleted."""


class MessageParseError(ArchiverError):
    """A message could not be resolved into a descriptor."""


class TransformError(ArchiverError):
    """The header normalization filter failed for a message."""


class SinkError(ArchiverError):
    """The archive sink could not be opened, written or finalized."""
