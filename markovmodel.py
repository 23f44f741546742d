from __future__ import annotations

import random
from typing import Dict, List, Optional

from kgramindex import (
    ALPHABET_SIZE,
    ArgumentError,
    ConstructionError,
    KGramFrequencyIndex,
    in_alphabet,
)

__all__ = [
    "ALPHABET_SIZE",
    "ArgumentError",
    "ConstructionError",
    "DomainError",
    "GenerationError",
    "MarkovModel",
]


class DomainError(ValueError):
    """Raised when sampling from a k-gram that has no observed successor."""


class GenerationError(RuntimeError):
    """
    Raised when generation reaches a k-gram with no observed successor.

    `partial` holds the text produced before the failing step.
    """

    def __init__(self, message: str, partial: str) -> None:
        super().__init__(message)
        self.partial = partial


class MarkovModel:
    """
    Character-level Markov model of fixed order over a circular text.

    Typical use: build from a training text, then query successor counts
    or generate new text that follows the same k-gram statistics.
    """

    def __init__(
        self,
        text: str,
        order: int,
        *,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Parameters
        ----------
        text
            Training text (ASCII only), treated as circular.
        order
            Markov order k, the length of every k-gram.
        rng
            Random source used for sampling. Pass a seeded
            `random.Random` for reproducible output.
        """
        self._index = KGramFrequencyIndex(text, order)
        self._rng = rng if rng is not None else random.Random()

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    @property
    def index(self) -> KGramFrequencyIndex:
        return self._index

    def order(self) -> int:
        """Return the Markov order k."""
        return self._index.order

    def total_frequency(self, kgram: str) -> int:
        """
        Return how many times `kgram` occurs in the circular text.
        Unknown k-grams have frequency 0.
        """
        self._check_kgram(kgram)
        counts = self._index.lookup(kgram)
        if counts is None:
            return 0
        return sum(counts)

    def symbol_frequency(self, kgram: str, symbol: str) -> int:
        """
        Return how many times `symbol` immediately follows `kgram`.

        An unknown k-gram has no observed successors, so the result is 0
        for every symbol.
        """
        self._check_kgram(kgram)
        self._check_symbol(symbol)
        counts = self._index.lookup(kgram)
        if counts is None:
            return 0
        return counts[ord(symbol)]

    def successors(self, kgram: str) -> Dict[str, int]:
        """Return {symbol: count} for the symbols observed after `kgram`."""
        self._check_kgram(kgram)
        return self._index.successors(kgram)

    def kgrams(self) -> List[str]:
        return self._index.kgrams()

    def sample_successor(
        self,
        kgram: str,
        rng: Optional[random.Random] = None,
    ) -> str:
        """
        Draw a symbol following `kgram`, weighted by its observed count.

        Parameters
        ----------
        kgram
            Context of exactly `order()` symbols.
        rng
            Optional random source overriding the model's own for this call.

        Raises
        ------
        ArgumentError
            If `kgram` has the wrong length.
        DomainError
            If `kgram` was never observed.
        """
        self._check_kgram(kgram)
        counts = self._index.lookup(kgram)
        if counts is None:
            raise DomainError(f"kgram {kgram!r} does not appear in the text")

        source = rng if rng is not None else self._rng
        idx = source.choices(range(ALPHABET_SIZE), weights=counts)[0]
        return chr(idx)

    def generate(
        self,
        seed_kgram: str,
        total_length: int,
        rng: Optional[random.Random] = None,
    ) -> str:
        """
        Generate `total_length` symbols starting with `seed_kgram`.

        Each new symbol is sampled from the last `order()` symbols of the
        output produced so far.

        Raises
        ------
        ArgumentError
            If the seed has the wrong length or `total_length` < order.
        GenerationError
            If a window of the output has no observed successor. The
            prefix generated up to that point is in `partial`.
        """
        self._check_kgram(seed_kgram)
        k = self.order()
        if isinstance(total_length, bool) or not isinstance(total_length, int):
            raise ArgumentError(
                f"total_length must be an int, got {type(total_length).__name__}"
            )
        if total_length < k:
            raise ArgumentError(
                f"total_length {total_length} is shorter than order {k}"
            )

        out: List[str] = list(seed_kgram)
        for _ in range(total_length - k):
            window = "".join(out[-k:])
            try:
                out.append(self.sample_successor(window, rng=rng))
            except DomainError as e:
                partial = "".join(out)
                raise GenerationError(
                    f"generation stopped after {len(partial)} symbols: {e}",
                    partial=partial,
                ) from e

        return "".join(out)

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _check_kgram(self, kgram: str) -> None:
        if not isinstance(kgram, str):
            raise ArgumentError(f"kgram must be a str, got {type(kgram).__name__}")
        if len(kgram) != self.order():
            raise ArgumentError(
                f"kgram {kgram!r} has length {len(kgram)}, expected {self.order()}"
            )

    @staticmethod
    def _check_symbol(symbol: str) -> None:
        if not isinstance(symbol, str) or len(symbol) != 1:
            raise ArgumentError(f"symbol must be a single character, got {symbol!r}")
        if not in_alphabet(symbol):
            raise ArgumentError(f"symbol {symbol!r} is outside the ASCII alphabet")
