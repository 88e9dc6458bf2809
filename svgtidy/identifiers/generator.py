"""Short identifier generation."""
from typing import Iterable, Iterator

# No a-f/A-F: a generated id must never read as a hex color such as #abc.
ID_ALPHABET = "ghijklmnopqrstuvwxyzGHIJKLMNOPQRSTUVWXYZ"


def nth_id(index: int, alphabet: str = ID_ALPHABET) -> str:
    """
    The index-th short id in bijective base-N order: g, h, ..., Z, gg, hg, ...

    The first digit written is the least significant one.
    """
    base = len(alphabet)
    chars = []
    remaining = index
    while True:
        chars.append(alphabet[remaining % base])
        remaining //= base
        if remaining == 0:
            break
        remaining -= 1
    return "".join(chars)


class IdGenerator:
    """
    Deterministic, endless supply of short ids, shortest first.

    Candidates in `used_ids` or `excluded_ids` are skipped. Iterating the
    generator again starts the sequence over.
    """

    def __init__(
        self,
        used_ids: Iterable[str] = (),
        excluded_ids: Iterable[str] = (),
        alphabet: str = ID_ALPHABET,
    ):
        if not alphabet:
            raise ValueError("alphabet must not be empty")
        self.skipped = set(used_ids) | set(excluded_ids)
        self.alphabet = alphabet

    def __iter__(self) -> Iterator[str]:
        index = 0
        while True:
            candidate = nth_id(index, self.alphabet)
            index += 1
            if candidate not in self.skipped:
                yield candidate
