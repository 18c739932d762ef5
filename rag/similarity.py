from math import isfinite, sqrt
from typing import List, Sequence

from rag.errors import DimensionMismatch, InvalidVector


def _scaled(vec: Sequence[float]) -> List[float]:
    # divide by the largest magnitude so squares neither overflow nor underflow
    scale = max(abs(x) for x in vec)
    if scale == 0:
        return []
    return [x / scale for x in vec]


def cosine_similarity(vec_a: Sequence[float], vec_b: Sequence[float]) -> float:
    """
    Cosine similarity = (A · B) / (||A|| * ||B||)

    Cosine is scale-invariant, so each vector is first divided by its largest
    component. Returns 0.0 when either vector is all zeros. NaN or infinite
    components raise InvalidVector.
    """
    if len(vec_a) != len(vec_b):
        raise DimensionMismatch(len(vec_a), len(vec_b), "Vectors must have the same dimensions")
    if not vec_a:
        return 0.0
    if not all(isfinite(x) for x in vec_a) or not all(isfinite(x) for x in vec_b):
        raise InvalidVector("Vectors must not contain NaN or infinite values")

    unit_a = _scaled(vec_a)
    unit_b = _scaled(vec_b)
    if not unit_a or not unit_b:
        return 0.0
    dot_product = sum(a * b for a, b in zip(unit_a, unit_b))
    norm_a = sqrt(sum(a * a for a in unit_a))
    norm_b = sqrt(sum(b * b for b in unit_b))
    score = dot_product / (norm_a * norm_b)
    return max(-1.0, min(1.0, score))
