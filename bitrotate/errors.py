class RotateError(RuntimeError):
    """Base class for failures around a file rotation."""


class InvalidDirectionError(RotateError, ValueError):
    """Raised when a direction token is neither ``left`` nor ``right``."""

    def __init__(self, token: str) -> None:
        super().__init__(f"invalid rotation direction: {token!r}")
        self.token = token


class SamePathError(RotateError):
    """Raised when input and output refer to the same file."""


class InputFileError(RotateError):
    """Raised when the input file cannot be opened or read."""


class OutputFileError(RotateError):
    """Raised when the output file cannot be opened or written."""


class SizeMismatchError(RotateError):
    """Raised when the output size differs from the input size."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            f"output file is wrong size: expected {expected} bytes, got {actual}"
        )
        self.expected = expected
        self.actual = actual
