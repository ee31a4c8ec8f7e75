"""
Custom exceptions for gamify.

Exception Hierarchy:
    GamifyError (base)
    ├── NotInitializedError (config document absent or corrupt)
    ├── InvalidInputError (volume, hook name or config key rejected)
    ├── ThemeNotFoundError (theme lookup failed)
    ├── ReservedThemeError (attempt to remove the built-in theme)
    ├── ThemeExistsError (install/copy onto an existing theme)
    ├── ExternalDocumentError (host settings file unreadable/unwritable)
    └── PlaybackUnavailableError (no sound or no player; never escapes playback)

Example:
    >>> from gamify.core.exceptions import ThemeNotFoundError
    >>> try:
    ...     raise ThemeNotFoundError("mario")
    ... except ThemeNotFoundError as e:
    ...     print(f"Theme '{e.theme_name}' is not installed: {e}")
"""


class GamifyError(Exception):
    """
    Base exception for all gamify errors.

    Attributes:
        message: Human-readable error message
        context: Optional dictionary of additional context
    """

    def __init__(self, message: str, **context: object) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        return self.message


class NotInitializedError(GamifyError):
    """
    Raised when the configuration document is missing or cannot be parsed.

    Callers translate this into an onboarding prompt (`gamify init`).
    """

    def __init__(self, message: str | None = None, **context: object) -> None:
        super().__init__(
            message or "Configuration file not found. Run initialization first.",
            **context,
        )


class InvalidInputError(GamifyError):
    """Raised when user input fails validation (volume, hook name, config key)."""


class ThemeNotFoundError(GamifyError):
    """Raised when a theme does not exist in the themes directory."""

    def __init__(self, theme_name: str, message: str | None = None, **context: object) -> None:
        super().__init__(message or f'Theme "{theme_name}" not found', **context)
        self.theme_name = theme_name


class ReservedThemeError(GamifyError):
    """Raised when removing the reserved built-in theme."""

    def __init__(self, theme_name: str, **context: object) -> None:
        super().__init__(f'Cannot remove built-in theme "{theme_name}"', **context)
        self.theme_name = theme_name


class ThemeExistsError(GamifyError):
    """Raised when installing or copying onto a theme name that is taken."""

    def __init__(self, theme_name: str, **context: object) -> None:
        super().__init__(f'Theme "{theme_name}" already exists', **context)
        self.theme_name = theme_name


class ExternalDocumentError(GamifyError):
    """
    Raised when a host-owned JSON document cannot be read or written.

    Attributes:
        path: The document that failed
    """

    def __init__(self, path: object, message: str, **context: object) -> None:
        super().__init__(message, **context)
        self.path = path


class PlaybackUnavailableError(GamifyError):
    """No sound file or no audio player is available. Swallowed by the player."""
