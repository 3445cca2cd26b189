"""Error taxonomy shared by the engine, the HTTP layer and the CLI."""


class LogStoreError(Exception):
    """Base class for every error raised by the log store."""


class InvalidRequest(LogStoreError):
    """Raised when caller input is unusable. Never retried."""


class InvalidCategory(InvalidRequest):
    def __init__(self, category):
        super().__init__(f"Invalid log type: {category!r}")
        self.category = category


class InvalidDate(InvalidRequest):
    def __init__(self, field: str, value):
        super().__init__(f"Invalid {field}: {value!r} is not an ISO-8601 date")
        self.field = field
        self.value = value


class IOFailure(LogStoreError):
    """Raised when reading or writing a category file fails at the OS level."""

    def __init__(self, message: str, path: str):
        super().__init__(message)
        self.path = path
