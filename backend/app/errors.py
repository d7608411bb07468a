class InvalidRequestError(Exception):
    """Request failed validation or references a missing / non-effective entity.

    Maps to a client error. ``errors`` holds the individual problems when the
    failure came from validation.
    """

    def __init__(self, message: str, errors: "list[str] | None" = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or [message]
