"""Core module providing configuration, logging, constants, and exceptions.

Exports:
    Exceptions:
        SpoilerError: Base exception for all package errors.
        CryptoError, GrammarError, FieldError, LoadError: Stage base errors.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from javardry_spoiler.core.config import (
    DumpSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from javardry_spoiler.core.exceptions import (
    ArityError,
    BadBoolError,
    BadGlobalKeyError,
    BadLengthError,
    BadMaskTokenError,
    BadPaddingError,
    BadReferenceError,
    ConfigurationError,
    CryptoError,
    EntityDecodeError,
    FieldError,
    GrammarError,
    LoadError,
    MissingCloseQuoteError,
    MissingEqualsError,
    MissingKeyError,
    MissingOpenQuoteError,
    NoKeyError,
    NotUtf8Error,
    NumberError,
    SpoilerError,
    UnknownEnumError,
    UnknownFlagBitError,
)
from javardry_spoiler.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)


__all__ = [
    # Base exception
    "SpoilerError",
    "ConfigurationError",
    # Cipher exceptions
    "CryptoError",
    "BadLengthError",
    "BadPaddingError",
    "NotUtf8Error",
    # Grammar exceptions
    "GrammarError",
    "NoKeyError",
    "MissingEqualsError",
    "MissingOpenQuoteError",
    "MissingCloseQuoteError",
    # Field exceptions
    "FieldError",
    "ArityError",
    "NumberError",
    "BadBoolError",
    "UnknownEnumError",
    "UnknownFlagBitError",
    "BadMaskTokenError",
    "BadReferenceError",
    # Load exceptions
    "LoadError",
    "MissingKeyError",
    "EntityDecodeError",
    "BadGlobalKeyError",
    # Configuration
    "Settings",
    "DumpSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]
