"""Quick statistical checks over generated values."""

from __future__ import annotations

from collections import Counter

import numpy as np


def shannon_entropy(values) -> float:
    """Shannon entropy in bits of a sequence of discrete values."""
    data = np.asarray(values).flatten()
    if len(data) == 0:
        return 0.0
    counts = np.array(list(Counter(data.tolist()).values()))
    probs = counts / len(data)
    return float(-np.sum(probs * np.log2(probs + 1e-15)))


def chi_squared_uniformity(values, low: int, high: int) -> dict:
    """Chi-squared test of integers against a uniform ``[low, high]``.

    Uses the normal approximation to the chi-squared critical value at
    p = 0.05, which is close enough for the bin counts used here.
    """
    data = np.asarray(values, dtype=np.int64).flatten()
    data = data[(data >= low) & (data <= high)]
    bins = high - low + 1
    _, counts = np.unique(data, return_counts=True)
    expected = max(len(data) / bins, 1e-15)
    # bins never hit contribute expected each; only observed ones are stored
    empty = bins - len(counts)
    chi2 = float(np.sum((counts - expected) ** 2) / expected + empty * expected)
    df = bins - 1
    critical = df + 1.645 * np.sqrt(2 * df) if df > 0 else 0.0
    return {"chi2": round(chi2, 4), "df": df, "uniform": chi2 < critical}


def serial_correlation(values, lag: int = 1) -> float:
    """Serial autocorrelation at given lag."""
    data = np.asarray(values, dtype=float).flatten()
    if len(data) < lag + 2:
        return 0.0
    mean = np.mean(data)
    var = np.var(data)
    if var < 1e-15:
        return 0.0
    return float(np.mean((data[:-lag] - mean) * (data[lag:] - mean)) / var)


def _grade(score: float) -> str:
    return (
        "A" if score >= 80 else
        "B" if score >= 60 else
        "C" if score >= 40 else
        "D" if score >= 20 else "F"
    )


def float_report(values, bins: int = 16) -> dict:
    """Range, moments and uniformity of floats expected in ``[0, 1)``."""
    data = np.asarray(values, dtype=float).flatten()
    in_range = bool(np.all((data >= 0.0) & (data < 1.0)))
    buckets = np.clip((data * bins).astype(np.int64), 0, bins - 1)
    chi = chi_squared_uniformity(buckets, 0, bins - 1)
    sc = serial_correlation(data)

    # a uniform [0, 1) sample has mean 1/2 and variance 1/12
    mean_err = abs(float(np.mean(data)) - 0.5) if len(data) else 0.5
    score = (
        (30 if in_range else 0)
        + (30 if chi["uniform"] else 0)
        + max(0.0, 20 - mean_err * 400)
        + max(0.0, 20 - abs(sc) * 400)
    )
    return {
        "samples": len(data),
        "in_range": in_range,
        "mean": round(float(np.mean(data)), 6) if len(data) else None,
        "variance": round(float(np.var(data)), 6) if len(data) else None,
        "chi_squared": chi,
        "serial_correlation": round(sc, 6),
        "quality_score": round(score, 1),
        "grade": _grade(score),
    }


def int_report(values, low: int, high: int) -> dict:
    """Bounds, coverage and uniformity of integers expected in ``[low, high]``."""
    data = np.asarray(values, dtype=np.int64).flatten()
    in_range = bool(np.all((data >= low) & (data <= high)))
    bins = high - low + 1
    chi = chi_squared_uniformity(np.clip(data, low, high), low, high)
    h = shannon_entropy(data)
    max_h = float(np.log2(min(bins, max(len(data), 1)))) if bins > 1 else 0.0
    eff = h / max_h if max_h > 0 else 1.0
    score = (30 if in_range else 0) + (30 if chi["uniform"] else 0) + eff * 40
    return {
        "samples": len(data),
        "low": low,
        "high": high,
        "in_range": in_range,
        "unique_values": int(len(np.unique(data))),
        "shannon_entropy": round(h, 4),
        "chi_squared": chi,
        "quality_score": round(score, 1),
        "grade": _grade(score),
    }
