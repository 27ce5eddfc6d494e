"""Key/value store parsing for decrypted scenario text.

The decrypted scenario is a list of ``KEY = "VALUE"`` assignments, one per
line. Values are not escape-aware: everything between the first quote
after ``=`` and the last character of the line (which must be a quote) is
the value.

Example:
    >>> kvs = parse_kvs('GameTitle = "Proving Grounds"')
    >>> kvs["GameTitle"]
    'Proving Grounds'
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass

from javardry_spoiler.core.exceptions import (
    MissingCloseQuoteError,
    MissingEqualsError,
    MissingKeyError,
    MissingOpenQuoteError,
    NoKeyError,
)
from javardry_spoiler.core.logging import get_logger


logger = get_logger(__name__)

# Only the key is matched with a regex; matching the whole line with one
# pattern is much slower on large scenarios.
KEY_PATTERN = re.compile(r"[0-9A-Za-z_]+")

ASCII_WHITESPACE = " \t\n\x0c\r"


@dataclass(frozen=True)
class DuplicateKey:
    """A key assigned more than once; the later value won.

    Attributes:
        key: The repeated key.
        discarded_value: The earlier value that was overwritten.
        line_number: Line of the overriding assignment.
    """

    key: str
    discarded_value: str
    line_number: int


class KeyValueStore(Mapping[str, str]):
    """Read-only mapping of scenario keys to raw string values.

    Attributes:
        duplicates: Keys that were assigned more than once, in file order.
    """

    def __init__(
        self,
        entries: Mapping[str, str] | None = None,
        *,
        duplicates: tuple[DuplicateKey, ...] = (),
    ) -> None:
        """Initialize the store.

        Args:
            entries: Key/value pairs. Copied.
            duplicates: Duplicate assignments seen while parsing.
        """
        self._entries: dict[str, str] = dict(entries or {})
        self.duplicates = duplicates

    def __getitem__(self, key: str) -> str:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({len(self)} entries, {len(self.duplicates)} duplicates)"

    def require(self, key: str) -> str:
        """Get the value of a mandatory key.

        Args:
            key: The key to look up.

        Returns:
            The raw value.

        Raises:
            MissingKeyError: If the key is absent.
        """
        try:
            return self._entries[key]
        except KeyError:
            raise MissingKeyError(f"mandatory key not found: {key}", key=key) from None

    def get_or(self, key: str, default: str) -> str:
        """Get the value of an optional key.

        Args:
            key: The key to look up.
            default: Value returned when the key is absent.

        Returns:
            The raw value, or ``default``.
        """
        return self._entries.get(key, default)

    def iter_seq(self, prefix: str) -> Iterator[str]:
        """Iterate the values of numbered keys ``prefix0``, ``prefix1``, ...

        Iteration stops at the first missing index, even if higher indices
        exist. Each call starts over from index 0.

        Args:
            prefix: Key prefix such as ``"Item"``.

        Yields:
            Raw values in index order.
        """
        # A run of present keys can never be longer than the store itself.
        for index in range(len(self._entries)):
            value = self._entries.get(f"{prefix}{index}")
            if value is None:
                return
            yield value


def _strip_ascii(text: str) -> str:
    return text.strip(ASCII_WHITESPACE)


def _lstrip_ascii(text: str) -> str:
    return text.lstrip(ASCII_WHITESPACE)


def parse_kvs(plaintext: str) -> KeyValueStore:
    """Parse decrypted scenario text into a key/value store.

    Args:
        plaintext: Decrypted scenario text.

    Returns:
        The parsed store. When a key repeats, the later value wins and the
        earlier one is recorded in ``duplicates``.

    Raises:
        NoKeyError: If a line does not start with an identifier.
        MissingEqualsError: If the key is not followed by ``=``.
        MissingOpenQuoteError: If ``=`` is not followed by ``"``.
        MissingCloseQuoteError: If the line does not end with ``"``.
    """
    entries: dict[str, str] = {}
    duplicates: list[DuplicateKey] = []

    for line_number, raw_line in enumerate(plaintext.split("\n"), start=1):
        line = _strip_ascii(raw_line)
        if not line:
            continue

        match = KEY_PATTERN.match(line)
        if match is None:
            raise NoKeyError("line does not start with a key", line_number=line_number, line=line)
        key = match.group()

        rest = _lstrip_ascii(line[match.end() :])
        if not rest.startswith("="):
            raise MissingEqualsError(
                f"expected '=' after key {key}", line_number=line_number, line=line
            )

        rest = _lstrip_ascii(rest[1:])
        if not rest.startswith('"'):
            raise MissingOpenQuoteError(
                f"expected '\"' after '=' for key {key}", line_number=line_number, line=line
            )

        rest = rest[1:]
        if not rest.endswith('"'):
            raise MissingCloseQuoteError(
                f"value of key {key} is not terminated by '\"'",
                line_number=line_number,
                line=line,
            )
        value = rest[:-1]

        previous = entries.get(key)
        if previous is not None:
            logger.warning(
                "Ignored duplicate entry",
                key=key,
                discarded_value=previous,
                line_number=line_number,
            )
            duplicates.append(DuplicateKey(key, previous, line_number))
        entries[key] = value

    return KeyValueStore(entries, duplicates=tuple(duplicates))


__all__ = [
    "DuplicateKey",
    "KeyValueStore",
    "parse_kvs",
]
