"""Exception classes for flashsets."""


class Error(Exception):
    """Base class for exceptions in this module."""

    pass


class TransientServiceError(Error):
    """
    Exception raised when an external service fails for infrastructure reasons
    rather than with a definitive answer.
    Used by the naming client and the collection store.
    """

    def __init__(self, service: str, detail: str | None = None) -> None:
        self.service = service
        self.detail = detail

    def __str__(self) -> str:
        message = f"The {self.service} is temporarily unavailable"
        if self.detail:
            message += f": {self.detail}"
        return message


class NamingServiceNotConfiguredError(TransientServiceError):
    """Exception raised when no naming endpoint has been configured."""

    def __init__(self) -> None:
        super().__init__(
            "naming service", "set FLASHSETS_NAMING_URL to enable name suggestions"
        )


class ItemsFileError(Error):
    """Exception raised when an item file cannot be read or parsed."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason

    def __str__(self) -> str:
        return f"Unable to load items from '{self.path}': {self.reason}"
