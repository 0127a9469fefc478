"""Errors raised by invitation editing and lookup."""


class InvitationError(Exception):
    """Base class for invitation errors."""


class ValidationError(InvitationError):
    """Required draft fields are missing; nothing was written."""

    def __init__(self, missing_fields: list[str]) -> None:
        self.missing_fields = list(missing_fields)
        super().__init__(f"Missing required fields: {', '.join(self.missing_fields)}")


class UploadError(InvitationError):
    """The storage backend rejected an upload or was unreachable."""


class BackendError(InvitationError):
    """The invitation store failed to read or write a record."""


class NotFoundError(InvitationError):
    """No invitation matched the requested id or slug."""


class SaveBlockedError(InvitationError):
    """A save cannot start while another save or an upload is pending."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)
