"""Similarity and distance measures between embedding vectors.

Each function accepts either :class:`~agentforge.embedding.Embedding` objects or
plain sequences of floats. Vectors of different lengths are compared over
their common prefix.
"""

from __future__ import annotations

import math
from functools import reduce
from typing import Sequence, Union

from .embedding import Embedding

Vector = Union[Embedding, Sequence[float]]


def _values(vector: Vector) -> Sequence[float]:
    return vector.vec if isinstance(vector, Embedding) else vector


def _magnitude(values: Sequence[float]) -> float:
    return math.sqrt(sum(x * x for x in values))


def _max_ignoring_nan(a: float, b: float) -> float:
    if math.isnan(a):
        return b
    if math.isnan(b):
        return a
    return max(a, b)


def dot_product(a: Vector, b: Vector) -> float:
    """Dot product of two vectors."""
    return sum(x * y for x, y in zip(_values(a), _values(b)))


def cosine_similarity(a: Vector, b: Vector, normalized: bool) -> float:
    """Cosine similarity of two vectors.

    When ``normalized`` is true the vectors are taken to be unit length and the
    dot product is returned. A zero-length vector gives NaN.
    """
    dot = dot_product(a, b)
    if normalized:
        return dot
    denominator = _magnitude(_values(a)) * _magnitude(_values(b))
    if denominator == 0.0:
        return math.nan if dot == 0.0 else math.copysign(math.inf, dot)
    return dot / denominator


def angular_distance(a: Vector, b: Vector, normalized: bool) -> float:
    """Angle between two vectors as a fraction of pi (0 to 1).

    NaN when the cosine similarity falls outside [-1, 1].
    """
    cosine = cosine_similarity(a, b, normalized)
    if math.isnan(cosine) or not -1.0 <= cosine <= 1.0:
        return math.nan
    return math.acos(cosine) / math.pi


def euclidean_distance(a: Vector, b: Vector) -> float:
    """Euclidean (L2) distance between two vectors."""
    return math.sqrt(sum((x - y) ** 2 for x, y in zip(_values(a), _values(b))))


def manhattan_distance(a: Vector, b: Vector) -> float:
    """Manhattan (L1) distance between two vectors."""
    return sum(abs(x - y) for x, y in zip(_values(a), _values(b)))


def chebyshev_distance(a: Vector, b: Vector) -> float:
    """Chebyshev (L-infinity) distance between two vectors."""
    return reduce(
        _max_ignoring_nan,
        (abs(x - y) for x, y in zip(_values(a), _values(b))),
        0.0,
    )