"""Errors raised by the notification use cases and their collaborators."""

from __future__ import annotations


class NotificationServiceError(Exception):
    """Base class for expected failures of the notification service."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidRequestError(NotificationServiceError):
    """Client supplied data failed required-field validation."""


class NotFoundError(NotificationServiceError):
    """A lookup found no entity where one was expected."""


class NoRecipientsError(NotFoundError):
    """No eligible staff account exists for the requested school."""


class StoreUnavailableError(NotificationServiceError):
    """Reading from the backing store failed."""


class StoreWriteFailedError(StoreUnavailableError):
    """Writing to the backing store failed."""


class DeliveryFailedError(NotificationServiceError):
    """The push provider rejected a message or could not be reached."""


class EmailDeliveryError(NotificationServiceError):
    """The mail relay did not accept a transactional email."""

    def __init__(self, message: str, *, details: str | None = None) -> None:
        super().__init__(message)
        self.details = details


__all__ = [
    "NotificationServiceError",
    "InvalidRequestError",
    "NotFoundError",
    "NoRecipientsError",
    "StoreUnavailableError",
    "StoreWriteFailedError",
    "DeliveryFailedError",
    "EmailDeliveryError",
]
