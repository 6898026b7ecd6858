"""
Exception classes for spot-converter.

This module defines all custom exceptions used throughout the application.
Each exception is designed to provide clear, actionable error messages
and to distinguish between different failure modes.

Exception Hierarchy:
    SpotConverterError (base)
        ConfigError - Configuration file issues
        DatabaseError - Conversion history database issues
        SpotifyError - Spotify API issues
        YouTubeError - YouTube Music search client issues
        InvalidInputError - Malformed conversion request
"""


class SpotConverterError(Exception):
    """
    Base exception for all spot-converter errors.

    All custom exceptions in this project inherit from this class,
    allowing callers to catch all spot-converter errors with a single
    except clause if desired.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context (e.g., track info, URLs).
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        """
        Initialize the base exception.

        Args:
            message: Human-readable error description that will be shown to the user.
            details: Optional dictionary containing additional context about the error.
                     Common keys include:
                     - 'url': URL that caused the error
                     - 'field': Request or config field that failed validation
                     - 'original_error': The underlying exception if wrapping another error
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return the error message for display."""
        return self.message


class ConfigError(SpotConverterError):
    """
    Raised when there's an issue with the configuration file.

    This is a CRITICAL error that should stop program execution.

    Common causes:
        - config.yaml not found
        - config.yaml has invalid YAML syntax
        - Required fields missing (output.directory)
        - Invalid field values (e.g., negative thread count, unknown weight)
    """
    pass


class DatabaseError(SpotConverterError):
    """
    Raised when there's an issue with the conversion history database.

    Fatal at startup (database cannot be opened), but NON-CRITICAL when
    recording a single conversion summary: the converted tracks are still
    returned to the caller.
    """
    pass


class SpotifyError(SpotConverterError):
    """
    Raised when there's an issue with the Spotify API.

    Can be CRITICAL (auth failure) or NON-CRITICAL (rate limiting).

    Attributes:
        is_auth_error: True if this is an authentication error (CRITICAL).
        is_rate_limit: True if this is a rate limit error (may retry).

    Example:
        raise SpotifyError(
            "Failed to fetch playlist: playlist is private",
            details={'playlist_url': url, 'status_code': 403}
        )
    """

    def __init__(
        self,
        message: str,
        details: dict | None = None,
        is_auth_error: bool = False,
        is_rate_limit: bool = False
    ) -> None:
        super().__init__(message, details)
        self.is_auth_error = is_auth_error
        self.is_rate_limit = is_rate_limit


class YouTubeError(SpotConverterError):
    """
    Raised when the YouTube Music search client cannot be used at all.

    Failures of a single search query are NOT reported with this error:
    the match selector treats them as a query with zero results. This
    error is reserved for failures that make the whole conversion
    impossible, such as the ytmusicapi client failing to construct.
    """
    pass


class InvalidInputError(SpotConverterError):
    """
    Raised when a conversion request is structurally invalid.

    The request fails before any track resolution begins and is not
    retried.

    Example:
        raise InvalidInputError(
            "Tracks array is required",
            details={'field': 'tracks'}
        )
    """
    pass
