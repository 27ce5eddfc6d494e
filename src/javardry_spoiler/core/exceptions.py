"""Custom exception hierarchy for the Javardry scenario spoiler.

This module defines the exception hierarchy raised by every stage of the
decode pipeline. All exceptions inherit from SpoilerError, enabling unified
error handling at the CLI boundary while preserving stage-specific context
(line numbers, field indices, entity ids) needed to reproduce a failure.

Example:
    >>> from javardry_spoiler.core.exceptions import MissingKeyError
    >>> raise MissingKeyError("mandatory key not found", key="GameTitle")
"""

from __future__ import annotations

from typing import Any


class SpoilerError(Exception):
    """Base exception for all scenario spoiler errors.

    All custom exceptions in this package inherit from this class,
    enabling unified error handling at the application boundary.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        """Return a detailed string representation of the exception.

        Returns:
            String representation suitable for debugging.
        """
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationError(SpoilerError):
    """Raised when application configuration is invalid."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


# =============================================================================
# Cipher Exceptions
# =============================================================================


class CryptoError(SpoilerError):
    """Base exception for scenario file decryption failures."""

    def __init__(
        self,
        message: str,
        *,
        size: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize crypto error with buffer size context.

        Args:
            message: Human-readable error description.
            size: Length in bytes of the buffer being processed.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if size is not None:
            combined_details["size"] = size
        super().__init__(message, details=combined_details)


class BadLengthError(CryptoError):
    """Raised when the ciphertext is not a whole number of cipher blocks."""


class BadPaddingError(CryptoError):
    """Raised when the trailing padding of the last block is malformed."""


class NotUtf8Error(CryptoError):
    """Raised when the decrypted bytes are not valid UTF-8 text."""


# =============================================================================
# Key/Value Grammar Exceptions
# =============================================================================


class GrammarError(SpoilerError):
    """Base exception for malformed ``KEY = "VALUE"`` lines.

    Attributes:
        line_number: 1-based number of the offending line.
        line: The offending line after whitespace trimming.
    """

    def __init__(
        self,
        message: str,
        *,
        line_number: int | None = None,
        line: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize grammar error with line context.

        Args:
            message: Human-readable error description.
            line_number: 1-based number of the offending line.
            line: The offending line.
            details: Optional dictionary containing additional error context.
        """
        self.line_number = line_number
        self.line = line
        combined_details = details or {}
        if line_number is not None:
            combined_details["line_number"] = line_number
        if line is not None:
            combined_details["line"] = line
        super().__init__(message, details=combined_details)


class NoKeyError(GrammarError):
    """Raised when a line does not start with an identifier."""


class MissingEqualsError(GrammarError):
    """Raised when the key is not followed by ``=``."""


class MissingOpenQuoteError(GrammarError):
    """Raised when ``=`` is not followed by an opening quote."""


class MissingCloseQuoteError(GrammarError):
    """Raised when the line does not end with a closing quote."""


# =============================================================================
# Field Decoding Exceptions
# =============================================================================


class FieldError(SpoilerError):
    """Base exception for entity field conversion failures.

    Attributes:
        field_index: Index of the field within the split entity text.
        raw: The raw text that failed to convert.
    """

    def __init__(
        self,
        message: str,
        *,
        field_index: int | None = None,
        raw: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize field error with field context.

        Args:
            message: Human-readable error description.
            field_index: Index of the field within the split entity text.
            raw: The raw text that failed to convert.
            details: Optional dictionary containing additional error context.
        """
        self.field_index = field_index
        self.raw = raw
        combined_details = details or {}
        if field_index is not None:
            combined_details["field_index"] = field_index
        if raw is not None:
            combined_details["raw"] = raw
        super().__init__(message, details=combined_details)


class ArityError(FieldError):
    """Raised when a text splits into the wrong number of fields.

    Attributes:
        expected: Required field count (a minimum when ``at_least`` is set).
        actual: Field count actually found.
        at_least: Whether ``expected`` is a lower bound.
    """

    def __init__(
        self,
        message: str,
        *,
        expected: int,
        actual: int,
        at_least: bool = False,
        field_index: int | None = None,
        raw: str | None = None,
    ) -> None:
        """Initialize arity error with count context.

        Args:
            message: Human-readable error description.
            expected: Required field count.
            actual: Field count actually found.
            at_least: Whether ``expected`` is a lower bound.
            field_index: Index of the enclosing field for nested splits.
            raw: The text that was split.
        """
        self.expected = expected
        self.actual = actual
        self.at_least = at_least
        super().__init__(
            message,
            field_index=field_index,
            raw=raw,
            details={"expected": expected, "actual": actual},
        )


class NumberError(FieldError):
    """Raised when a field is not a valid integer of its declared type."""


class BadBoolError(FieldError):
    """Raised when a field is not one of the literal tokens ``true``/``false``."""


class UnknownEnumError(FieldError):
    """Raised when an enum or value-coded field holds an unknown code.

    Attributes:
        value: The unrecognized code.
    """

    def __init__(
        self,
        message: str,
        *,
        value: int,
        field_index: int | None = None,
        raw: str | None = None,
    ) -> None:
        """Initialize unknown enum error with the offending code.

        Args:
            message: Human-readable error description.
            value: The unrecognized code.
            field_index: Index of the field within the split entity text.
            raw: The raw field text.
        """
        self.value = value
        super().__init__(message, field_index=field_index, raw=raw, details={"value": value})


class UnknownFlagBitError(FieldError):
    """Raised when a flag-set field sets a bit its flag type does not define.

    Attributes:
        bits: The undefined bits that were set.
    """

    def __init__(
        self,
        message: str,
        *,
        bits: int,
        field_index: int | None = None,
        raw: str | None = None,
    ) -> None:
        """Initialize unknown flag bit error with the offending bits.

        Args:
            message: Human-readable error description.
            bits: The undefined bits that were set.
            field_index: Index of the field within the split entity text.
            raw: The raw field text.
        """
        self.bits = bits
        super().__init__(message, field_index=field_index, raw=raw, details={"bits": bin(bits)})


class BadMaskTokenError(FieldError):
    """Raised when an equip-mask token is not ``class[N]``/``race[N]`` with N in 0-35.

    Attributes:
        token: The offending token.
    """

    def __init__(
        self,
        message: str,
        *,
        token: str,
        field_index: int | None = None,
        raw: str | None = None,
    ) -> None:
        """Initialize bad mask token error.

        Args:
            message: Human-readable error description.
            token: The offending token.
            field_index: Index of the field within the split entity text.
            raw: The raw field text.
        """
        self.token = token
        super().__init__(message, field_index=field_index, raw=raw, details={"token": token})


class BadReferenceError(FieldError):
    """Raised when an entity reference is neither ``-1`` nor ``item[N]``."""


# =============================================================================
# Load Exceptions
# =============================================================================


class LoadError(SpoilerError):
    """Base exception for scenario aggregation failures."""


class MissingKeyError(LoadError):
    """Raised when a mandatory key is absent from the key/value store.

    Attributes:
        key: The missing key.
    """

    def __init__(
        self,
        message: str,
        *,
        key: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize missing key error.

        Args:
            message: Human-readable error description.
            key: The missing key.
            details: Optional dictionary containing additional error context.
        """
        self.key = key
        combined_details = details or {}
        combined_details["key"] = key
        super().__init__(message, details=combined_details)


class EntityDecodeError(LoadError):
    """Raised when one entity of a sequence fails to decode.

    The message reads ``"<entity> <id>: <cause>"``, e.g.
    ``"item 7: unknown item kind value: 99"``.

    Attributes:
        entity: Entity type name ("stat", "race", "item", ...).
        entity_id: Positional id of the failing entity.
        cause: The underlying field error.
    """

    def __init__(self, entity: str, entity_id: int, cause: SpoilerError) -> None:
        """Initialize entity decode error.

        Args:
            entity: Entity type name.
            entity_id: Positional id of the failing entity.
            cause: The underlying error.
        """
        self.entity = entity
        self.entity_id = entity_id
        self.cause = cause
        super().__init__(f"{entity} {entity_id}: {cause}")


class BadGlobalKeyError(LoadError):
    """Raised when a scenario-wide key holds a malformed value.

    The message reads ``"key <key>: <cause>"``, e.g.
    ``"key SpellLvNum: invalid u32 number: 'x'"``.

    Attributes:
        key: The key whose value failed to convert.
        cause: The underlying field error.
    """

    def __init__(self, key: str, cause: SpoilerError) -> None:
        """Initialize bad global key error.

        Args:
            key: The key whose value failed to convert.
            cause: The underlying error.
        """
        self.key = key
        self.cause = cause
        super().__init__(f"key {key}: {cause}", details={"key": key})


__all__ = [
    # Base exception
    "SpoilerError",
    # Configuration exceptions
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
]
