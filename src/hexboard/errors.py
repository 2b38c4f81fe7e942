"""Exceptions raised by board lookups and save document handling."""


class BoardError(Exception):
    """Base class for board state errors."""


class TileNotFoundError(BoardError, KeyError):
    """No tile exists at the requested coordinate."""

    def __init__(self, coordinate):
        super().__init__(coordinate)
        self.coordinate = coordinate

    def __str__(self) -> str:
        return f"No tile at {self.coordinate}"


class MalformedDocumentError(BoardError, ValueError):
    """A save document could not be parsed into a version and a record list."""


class VersionMismatchError(BoardError):
    """A save document was written by a newer schema than this build supports.

    Only raised by ``check_version(..., strict=True)``; regular loading tolerates
    newer documents and skips what it does not understand.
    """

    def __init__(self, version: int, supported: int):
        super().__init__(f"Document version {version} is newer than supported version {supported}")
        self.version = version
        self.supported = supported
