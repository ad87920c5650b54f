# qregsim/bitaddr.py
"""Bit-address arithmetic between the full 2^n index space and gate-local coordinates.

A gate on k qubits splits every full index into two parts:

* the *pattern*, k bits read from the participating qubit positions, with the
  first-listed qubit as the most significant bit (the matrix row/column order);
* the *compressed index*, the remaining n-k bits packed together in ascending
  position order.

``expand`` and ``compress`` convert between the two views. The gap masks they
share depend only on the qubit positions, so callers compute them once per
gate application with ``masks`` and pass them into the per-amplitude calls.
"""
import operator
from typing import Sequence, Tuple

from .errors import DuplicateQubit, InvalidQubitCount, InvalidQubitIndex

def positions(qubits) -> Tuple[int, ...]:
    """Integer bit positions for a list of Qubit handles or plain ints."""
    return tuple(operator.index(q) for q in qubits)

def check_qubits(qubits, n: int) -> Tuple[int, ...]:
    """Validate a qubit list against an n-qubit register and return its positions.

    Raises before anything touches the amplitudes, so a bad call never leaves a
    partially updated state behind.
    """
    qs = positions(qubits)
    if not qs or len(qs) > n:
        raise InvalidQubitCount(f"cannot address {len(qs)} qubit(s) in a {n}-qubit register")
    for q in qs:
        if q < 0 or q >= n:
            raise InvalidQubitIndex(q, n)
    seen = set()
    for q in qs:
        if q in seen:
            raise DuplicateQubit(q)
        seen.add(q)
    return qs

def masks(qubits: Sequence[int]) -> Tuple[int, ...]:
    """k+1 gap masks for the sorted qubit positions q_0 < ... < q_{k-1}.

    Gap j covers the positions strictly between q_{j-1} and q_j (gap 0 is below
    q_0, gap k is everything above q_{k-1}). Compressed bits landing in gap j
    are shifted left by j, the number of participating qubits beneath them.
    """
    qs = sorted(positions(qubits))
    out = [(1 << qs[0]) - 1]
    for lo, hi in zip(qs, qs[1:]):
        out.append(((1 << hi) - 1) & (-1 << (lo + 1)))
    out.append(-1 << (qs[-1] + 1))
    return tuple(out)

def spread(compressed: int, gap_masks: Sequence[int]) -> int:
    """Place the compressed bits on the non-participating positions."""
    full = 0
    for j, m in enumerate(gap_masks):
        full |= (compressed << j) & m
    return full

def expand(qubits, compressed: int, pattern: int, gap_masks=None) -> int:
    qs = positions(qubits)
    if gap_masks is None:
        gap_masks = masks(qs)
    k = len(qs)
    full = spread(compressed, gap_masks)
    for j, q in enumerate(qs):
        full |= ((pattern >> (k - 1 - j)) & 1) << q
    return full

def compress(qubits, full: int, gap_masks=None) -> Tuple[int, int]:
    """Inverse of ``expand``: return ``(compressed, pattern)`` for a full index."""
    qs = positions(qubits)
    if gap_masks is None:
        gap_masks = masks(qs)
    k = len(qs)
    compressed = 0
    for j, m in enumerate(gap_masks):
        compressed |= (full & m) >> j
    pattern = 0
    for q in qs:
        pattern = (pattern << 1) | ((full >> q) & 1)
    return compressed, pattern

def pair_masks(qubit) -> Tuple[int, int]:
    q = operator.index(qubit)
    return -1 << (q + 1), (1 << q) - 1

def index_pair(compressed: int, qubit, upper=None, lower=None) -> Tuple[int, int]:
    """k=1 case: indices of the qubit-bit-0 and qubit-bit-1 amplitudes in a slice."""
    q = operator.index(qubit)
    if upper is None:
        upper, lower = pair_masks(q)
    i0 = ((compressed << 1) & upper) | (compressed & lower)
    return i0, i0 | (1 << q)
