from __future__ import annotations

from typing import Dict, List, Optional, Tuple


# Symbols are the standard ASCII code points; a symbol's slot in a
# frequency vector is its ord().
ALPHABET_SIZE = 128


class ArgumentError(ValueError):
    """Raised when a caller passes an argument the model cannot accept."""


class ConstructionError(ArgumentError):
    """Raised when text/order are unusable for building an index."""


def in_alphabet(symbol: str) -> bool:
    return ord(symbol) < ALPHABET_SIZE


class KGramFrequencyIndex:
    """
    Successor counts for every k-gram of a circular text.

    The text is extended with its own first k symbols so that the last
    k-gram of the original text is followed by a symbol wrapping around to
    its head. Exactly len(text) windows are scanned; the appended suffix
    only supplies successors.

    Typical use: build once, then query through `lookup`.
    """

    def __init__(self, text: str, order: int) -> None:
        """
        Parameters
        ----------
        text
            Training text. Must be non-empty, at least `order` symbols long
            and contain only ASCII symbols.
        order
            Length k of every k-gram. Must be a positive int.
        """
        _check_construction(text, order)

        self.order = order
        self.window_count = len(text)

        # k-gram -> successor counts, indexed by ord(symbol)
        self._counts: Dict[str, List[int]] = {}

        self._build(text)

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    def lookup(self, kgram: str) -> Optional[Tuple[int, ...]]:
        """
        Return the frequency vector of `kgram`, or None if it was never
        observed. The returned tuple is a copy.
        """
        counts = self._counts.get(kgram)
        if counts is None:
            return None
        return tuple(counts)

    def successors(self, kgram: str) -> Dict[str, int]:
        """
        Return {symbol: count} for every symbol observed after `kgram`.
        Empty if the k-gram is unknown.
        """
        counts = self._counts.get(kgram)
        if counts is None:
            return {}
        return {chr(i): c for i, c in enumerate(counts) if c}

    def kgrams(self) -> List[str]:
        """Return all observed k-grams, sorted."""
        return sorted(self._counts)

    def __len__(self) -> int:
        return len(self._counts)

    def __contains__(self, kgram: object) -> bool:
        return kgram in self._counts

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _build(self, text: str) -> None:
        k = self.order
        circular = text + text[:k]

        for i in range(len(text)):
            kgram = circular[i : i + k]
            successor = circular[i + k]

            counts = self._counts.get(kgram)
            if counts is None:
                counts = [0] * ALPHABET_SIZE
                self._counts[kgram] = counts
            counts[ord(successor)] += 1


def _check_construction(text: str, order: int) -> None:
    if isinstance(order, bool) or not isinstance(order, int):
        raise ConstructionError(f"order must be an int, got {type(order).__name__}")
    if order < 1:
        raise ConstructionError(f"order must be positive, got {order}")
    if not isinstance(text, str):
        raise ConstructionError(f"text must be a str, got {type(text).__name__}")
    if not text:
        raise ConstructionError("text must not be empty")
    if len(text) < order:
        raise ConstructionError(
            f"text of length {len(text)} is shorter than order {order}"
        )

    for pos, ch in enumerate(text):
        if not in_alphabet(ch):
            raise ConstructionError(
                f"symbol {ch!r} at position {pos} is outside the "
                f"{ALPHABET_SIZE}-symbol ASCII alphabet"
            )
