"""Exceptions raised while loading snapshots and building a review report."""


class IdnaDiffError(Exception):
    """Base class, any of these aborts the whole report."""


class MissingDataset(IdnaDiffError):
    """A data file for the requested version could not be supplied."""


class MalformedRecord(IdnaDiffError, ValueError):
    """
    A single record of a data file is structurally invalid.

    Loaders skip such records, callers of the strict parsing functions
    see them raised.
    """
    def __init__(self, message, fname=None, lineno=None):
        self.fname = fname
        self.lineno = lineno
        if fname is not None:
            message = f'{fname}:{lineno}: {message}'
        super().__init__(message)


class InvalidVersionLabel(IdnaDiffError, ValueError):
    """A version label does not look like a Unicode release of 12.0.0 or later."""
