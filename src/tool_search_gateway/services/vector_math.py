# Vector helpers
# Averaging, L2 normalization and cosine similarity over float32 vectors

from typing import Any, Sequence

import numpy as np
from numpy.typing import NDArray

Vector = NDArray[np.float32]


def zero_vector(dimension: int) -> Vector:
    """Return an all-zero vector of the given dimension."""
    return np.zeros(dimension, dtype=np.float32)


def average(vectors: Sequence[Vector]) -> Vector:
    """Elementwise mean of equally sized vectors."""
    return np.mean(np.stack(vectors), axis=0).astype(np.float32)


def normalize(vector: Vector) -> Vector:
    """Scale a vector to unit length; the zero vector is returned unchanged."""
    norm = np.linalg.norm(vector)
    if norm == 0:
        return vector
    return (vector / norm).astype(np.float32)


def cosine_similarity(vec1: Any, vec2: Any) -> float:
    """Compute cosine similarity between two vectors."""
    vec1 = np.asarray(vec1, dtype=np.float64)
    vec2 = np.asarray(vec2, dtype=np.float64)

    norm1 = np.linalg.norm(vec1)
    norm2 = np.linalg.norm(vec2)

    if norm1 == 0 or norm2 == 0:
        return 0.0

    return float(np.dot(vec1, vec2) / (norm1 * norm2))
