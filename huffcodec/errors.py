"""Exception types raised by the codec and its file glue."""


class FormatError(ValueError):
    """
    Compressed input is structurally invalid.

    Carries the offending field and the expected/found values so callers can
    report the problem precisely.
    """

    def __init__(self, message: str, field: str | None = None, expected=None, found=None):
        if field is not None:
            message = f"{message} ({field}: expected {expected}, found {found})"
        super().__init__(message)
        self.field = field
        self.expected = expected
        self.found = found


class IOUnavailable(OSError):
    """
    A source could not be read (action="read") or a destination could not be
    written (action="write").
    """

    def __init__(self, message: str, path=None, action: str = "read"):
        super().__init__(message)
        self.path = path
        self.action = action
