#!/usr/bin/env python3
"""
Main script to build a MarkovModel from a training text and either print
successor frequencies for some k-grams or generate random text.

Usage examples:

    # Generate 200 characters from an order-3 model of a text file
    python textgen.py --order 3 --length 200 corpus.txt

    # Read the training text from stdin, reproducible output
    cat corpus.txt | python textgen.py --order 4 --random-seed 7

    # Print the successor frequency table of some k-grams
    python textgen.py corpus.txt --order 2 --kgrams th he an
"""

import argparse
import random
import sys
from typing import List, Optional

from kgramindex import ArgumentError, in_alphabet
from markovmodel import GenerationError, MarkovModel


# --------------------------------------------------------------------------- #
# Helper functions
# --------------------------------------------------------------------------- #


def load_text(path: str) -> str:
    """
    Read the whole training text from `path`, or from stdin when path is "-".
    """
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8", errors="ignore") as f:
        return f.read()


def strip_non_ascii(text: str) -> str:
    """
    Drop every symbol the model cannot represent.
    """
    return "".join(ch for ch in text if in_alphabet(ch))


def build_markov_model(
    text: str,
    order: int,
    random_seed: Optional[int] = None,
) -> MarkovModel:
    """
    Build a MarkovModel, reporting progress on stderr.
    """
    print(f"Loaded {len(text)} characters", file=sys.stderr)

    rng = random.Random(random_seed)
    model = MarkovModel(text, order, rng=rng)

    print(
        f"MarkovModel initialized (order={model.order()}, "
        f"kgrams={len(model.index)})",
        file=sys.stderr,
    )
    return model


def print_frequencies(model: MarkovModel, kgrams: List[str]) -> None:
    """
    Print total frequency and observed successors for each k-gram.
    """
    print("\nK-gram frequencies:")
    print("-" * 70)
    print(f"{'kgram':12s} {'freq':>8s}  successors")
    print("-" * 70)

    for kgram in kgrams:
        total = model.total_frequency(kgram)
        succ = model.successors(kgram)
        listing = " ".join(f"{s!r}:{c}" for s, c in sorted(succ.items()))
        print(f"{kgram!r:12s} {total:8d}  {listing}")
    print("-" * 70)


def generate_text(
    model: MarkovModel,
    seed_kgram: str,
    length: int,
) -> str:
    """
    Generate `length` characters, or as many as possible before the
    model reaches an unobserved k-gram (reported on stderr).
    """
    try:
        return model.generate(seed_kgram, length)
    except GenerationError as e:
        print(f"Warning: {e}", file=sys.stderr)
        return e.partial


# --------------------------------------------------------------------------- #
# Argument parsing and main entry
# --------------------------------------------------------------------------- #

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Build a fixed-order character Markov model over a circular "
            "training text, then generate random text from it or print "
            "successor frequencies of selected k-grams."
        )
    )

    parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="Training text file. Use '-' (default) to read from stdin.",
    )

    parser.add_argument(
        "--order",
        type=int,
        default=2,
        help="Markov order (k-gram length). Default: 2",
    )

    parser.add_argument(
        "--length",
        type=int,
        default=100,
        help="Number of characters to generate, seed included. Default: 100",
    )

    parser.add_argument(
        "--seed-kgram",
        type=str,
        default=None,
        help=(
            "Initial k-gram of the generated text. "
            "Default: the first k characters of the training text."
        ),
    )

    parser.add_argument(
        "--random-seed",
        type=int,
        default=None,
        help="Seed for the random generator, for reproducible output.",
    )

    parser.add_argument(
        "--kgrams",
        type=str,
        nargs="+",
        default=None,
        help="Print the frequency table of these k-grams instead of generating.",
    )

    parser.add_argument(
        "--strip-non-ascii",
        action="store_true",
        default=False,
        help="Drop non-ASCII characters from the training text. Default: False",
    )

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)

    try:
        text = load_text(args.input)
    except OSError as e:
        print(f"Error: cannot read {args.input}: {e}", file=sys.stderr)
        sys.exit(1)

    if args.strip_non_ascii:
        text = strip_non_ascii(text)

    try:
        model = build_markov_model(text, args.order, args.random_seed)

        if args.kgrams:
            print_frequencies(model, args.kgrams)
            return

        seed_kgram = args.seed_kgram if args.seed_kgram is not None else text[: args.order]
        print(generate_text(model, seed_kgram, args.length))
    except ArgumentError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
