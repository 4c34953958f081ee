class LinkRegistryError(Exception):
    """Base class for every failure the link registry reports."""

    message = "Link registry error"

    def __init__(self, message=None):
        super().__init__(message or self.message)
        self.message = message or self.message


class InvalidTarget(LinkRegistryError):
    message = "Invalid or missing targetUrl. Must start with http:// or https://"


class InvalidCode(LinkRegistryError):
    message = (
        "Invalid customCode. Must be 6 to 8 characters long and contain only "
        "alphanumeric characters (A-Z, a-z, 0-9)."
    )


class CodeConflict(LinkRegistryError):
    message = "Conflict: This short code already exists. Please choose a different one."


class GenerationExhausted(LinkRegistryError):
    message = "Failed to generate a unique short code. Please try again."


class NotFound(LinkRegistryError):
    message = "Link not found."


class StorageFailure(LinkRegistryError):
    """Persistence layer failed (connection loss, timeout, ...)."""

    message = "Storage failure"
