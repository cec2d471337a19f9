"""
Error taxonomy for the messaging core.

Validation kinds are raised before any store mutation so the caller can show
them to the user directly. BackendUnavailableError wraps store failures and is
never retried here.
"""

from __future__ import annotations

from typing import Optional


class MessagingError(Exception):
    """Base class for every error the messaging services raise."""

    code: str = "messaging_error"
    status_code: int = 400
    default_message: str = "Messaging operation failed"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(MessagingError):
    code = "not_found"
    status_code = 404
    default_message = "No user found with that ID or Username."


class AmbiguousTargetError(MessagingError):
    code = "ambiguous"
    status_code = 409
    default_message = "Multiple users found. Please use the unique Texting ID."


class SelfTargetError(MessagingError):
    code = "self_target"
    status_code = 400
    default_message = "You cannot send a request to yourself."


class AlreadyConnectedError(MessagingError):
    code = "already_connected"
    status_code = 409
    default_message = "You already have a pending or accepted chat with this user."


class NotAuthorizedError(MessagingError):
    code = "not_authorized"
    status_code = 403
    default_message = "You are not allowed to perform this action."


class EmptyMessageError(MessagingError):
    code = "empty_message"
    status_code = 422
    default_message = "Message text cannot be empty."


class TextingIdTakenError(MessagingError):
    code = "texting_id_taken"
    status_code = 409
    default_message = "That Texting ID is already taken."


class InvalidTextingIdError(MessagingError):
    code = "invalid_texting_id"
    status_code = 422
    default_message = "Texting ID must look like xxxx-xxxx (letters and digits)."


class BackendUnavailableError(MessagingError):
    code = "backend_unavailable"
    status_code = 503
    default_message = "The message store is unavailable. Please try again."


class InvalidDecisionError(MessagingError):
    code = "invalid_decision"
    status_code = 422
    default_message = "Decision must be 'accepted' or 'denied'."


class UnsupportedLanguagePairError(MessagingError):
    code = "unsupported_language_pair"
    status_code = 422
    default_message = "Translation between these languages is not supported."


class TranslationFailedError(MessagingError):
    code = "translation_failed"
    status_code = 502
    default_message = "Failed to translate the message due to a server error."
