"""Decoding of numbered entity sequences from the key/value store."""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from javardry_spoiler.core.exceptions import EntityDecodeError, FieldError
from javardry_spoiler.core.logging import get_logger
from javardry_spoiler.decoding.kvs import KeyValueStore


logger = get_logger(__name__)

T = TypeVar("T")


def decode_sequence(
    kvs: KeyValueStore,
    prefix: str,
    entity: str,
    decoder: Callable[[int, str], T],
) -> tuple[T, ...]:
    """Decode every entity of a numbered key sequence.

    Decoding aborts on the first entity that fails; no partial sequence is
    returned.

    Args:
        kvs: Parsed key/value store.
        prefix: Key prefix of the sequence (e.g., "Item").
        entity: Entity name used in errors and log events (e.g., "item").
        decoder: Function decoding one entity from its id and raw text.

    Returns:
        Decoded entities in id order.

    Raises:
        EntityDecodeError: If any entity fails to decode.
    """
    entities: list[T] = []
    for entity_id, raw in enumerate(kvs.iter_seq(prefix)):
        try:
            entities.append(decoder(entity_id, raw))
        except FieldError as e:
            raise EntityDecodeError(entity, entity_id, e) from e

    logger.debug("Decoded entity sequence", entity=entity, count=len(entities))
    return tuple(entities)


__all__ = ["decode_sequence"]
