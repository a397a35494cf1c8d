"""Recency Store - bounded, case-insensitive search history."""

import json
import logging

from .kv_store import KeyValueStore
from .models import HISTORY_KEY, LAST_SEARCHED_KEY, MAX_HISTORY


logger = logging.getLogger(__name__)


class StoreReadError(Exception):
    """Persisted history could not be decoded. Recovered inside load()."""


def _same_city(a: str, b: str) -> bool:
    return a.lower() == b.lower()


def _without(history: list[str], city: str) -> list[str]:
    return [c for c in history if not _same_city(c, city)]


def _normalize(history: list[str]) -> list[str]:
    """Drop later case-insensitive duplicates and cap the length."""
    normalized: list[str] = []
    for city in history:
        if not any(_same_city(city, seen) for seen in normalized):
            normalized.append(city)
    return normalized[:MAX_HISTORY]


def _decode_history(raw: str) -> list[str]:
    try:
        history = json.loads(raw)
    except ValueError as e:
        raise StoreReadError(f'History is not valid JSON: {e}') from e
    if not isinstance(history, list) or not all(isinstance(c, str) for c in history):
        raise StoreReadError('History is not a list of city names')
    return history


class RecencyStore:
    """Recent searches and the last searched city, kept in a key-value store.

    History is most-recent-first, holds at most ``MAX_HISTORY`` entries, and
    never holds two entries that differ only by case. Every mutation is
    written through to the backing store before returning.
    """

    def __init__(self, kv: KeyValueStore):
        self.kv = kv

    def _read_history(self) -> list[str]:
        raw = self.kv.get(HISTORY_KEY)
        if raw is None:
            return []
        try:
            return _normalize(_decode_history(raw))
        except StoreReadError as e:
            logger.warning(f'Ignoring stored search history: {e}')
            return []

    def _write_history(self, history: list[str]) -> None:
        self.kv.set(HISTORY_KEY, json.dumps(history))

    def load(self) -> tuple[list[str], str | None]:
        """Read the search history and last searched city.

        Returns:
            ``(history, last_searched)``. Missing or malformed values come
            back as an empty list and ``None``.
        """
        last_searched = self.kv.get(LAST_SEARCHED_KEY) or None
        return self._read_history(), last_searched

    def record_success(self, city: str) -> list[str]:
        """Move ``city`` to the front of the history and mark it last searched.

        Args:
            city: The city from a successful lookup.

        Returns:
            The updated history.
        """
        history = [city, *_without(self._read_history(), city)][:MAX_HISTORY]
        self._write_history(history)
        self.kv.set(LAST_SEARCHED_KEY, city)
        return history

    def remove(self, city: str) -> list[str]:
        """Remove every case-insensitive match of ``city`` from the history.

        Clears the last searched city too when it matches.

        Returns:
            The updated history.
        """
        history = _without(self._read_history(), city)
        self._write_history(history)

        last_searched = self.kv.get(LAST_SEARCHED_KEY)
        if last_searched is not None and _same_city(last_searched, city):
            self.kv.delete(LAST_SEARCHED_KEY)
        return history
