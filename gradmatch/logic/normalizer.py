"""
Normalizer

Rescales raw test metrics onto a common 0-100 scale.

Every metric is anchored at its documented domain minimum:
    normalized = (raw - min) / (max - min) * 100
so GRE 260 -> 0 and 340 -> 100, IELTS 0 -> 0 and 9 -> 100, CGPA 0 -> 0 and
10 -> 100. Catalog-side scores are derived with these same maps (see aggregator.py),
which keeps student and institution scores comparable for tier
classification.

Out-of-domain values are not clamped: they produce negative or >100 results.
Domain checks live in validation.py and run before these functions.
"""

from .constants import Metric, METRIC_DOMAINS, NORMALIZED_SCALE


def normalize(metric: Metric, raw_value: float) -> float:
    """
    Map a raw metric value linearly onto 0-100.

    Args:
        metric: Which metric the value belongs to
        raw_value: Raw score in the metric's native units

    Returns:
        Normalized score (unbounded for out-of-domain input)
    """
    try:
        low, high = METRIC_DOMAINS[Metric(metric)]
    except ValueError:
        raise ValueError(f"Unknown metric: {metric!r}")
    return (float(raw_value) - low) / (high - low) * NORMALIZED_SCALE


def normalize_gre(gre: float) -> float:
    return normalize(Metric.GRE, gre)


def normalize_ielts(ielts: float) -> float:
    return normalize(Metric.IELTS, ielts)


def normalize_cgpa(cgpa: float) -> float:
    return normalize(Metric.CGPA, cgpa)

