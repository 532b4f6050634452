"""Math helpers — dispersion, normalization, similarity. No engine imports."""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np


def mean_abs_deviation(values: Sequence[float]) -> float:
    arr = np.asarray(values, dtype=np.float64)
    if arr.size == 0:
        return 0.0
    return float(np.mean(np.abs(arr - arr.mean())))


def dispersion_ratio(values: Sequence[float]) -> float:
    """MAD / mean. 0 for empty input or a non-positive mean."""
    arr = np.asarray(values, dtype=np.float64)
    if arr.size == 0:
        return 0.0
    mean = float(arr.mean())
    if mean <= 0:
        return 0.0
    return mean_abs_deviation(arr) / mean


def normalize_to_mean(values: Sequence[float]) -> list[float]:
    """Scale so the mean is 1.0. All-zero input maps to all ones."""
    arr = np.asarray(values, dtype=np.float64)
    if arr.size == 0:
        return []
    mean = float(arr.mean())
    if abs(mean) < 1e-10:
        return [1.0] * int(arr.size)
    return [float(v) for v in arr / mean]


def cosine_similarity(a: dict[str, float], b: dict[str, float]) -> float:
    """Cosine similarity of two sparse vectors keyed by name. 0 if either is empty."""
    keys = sorted(set(a) | set(b))
    if not keys:
        return 0.0
    va = np.array([a.get(k, 0.0) for k in keys], dtype=np.float64)
    vb = np.array([b.get(k, 0.0) for k in keys], dtype=np.float64)
    na = float(np.linalg.norm(va))
    nb = float(np.linalg.norm(vb))
    if na == 0 or nb == 0:
        return 0.0
    return float(np.dot(va, vb) / (na * nb))


def clamp(value: float, lo: float = 0.0, hi: float = 1.0) -> float:
    return max(lo, min(hi, value))


def safe_mean(values: Sequence[float], default: float = 0.0) -> float:
    if len(values) == 0:
        return default
    return float(np.mean(np.asarray(values, dtype=np.float64)))


def round_half_up(value: float) -> int:
    """Round halves toward +inf. Python's round() would round them to even."""
    return int(math.floor(value + 0.5))
