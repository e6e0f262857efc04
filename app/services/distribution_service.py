from typing import Optional, Sequence, Tuple

from app.models.stat import Quartiles

TUKEY_K = 1.5


def tukey_fences(q1: float, q3: float) -> Tuple[float, float]:
    iqr = q3 - q1
    return q1 - TUKEY_K * iqr, q3 + TUKEY_K * iqr


def compute_quartiles(values: Sequence[float]) -> Optional[Quartiles]:
    """
    Nearest-rank quartiles for one bucket of mood values.

    q1/median/q3 are sorted[floor(n * p)] with no interpolation between
    ranks. Outliers are the values outside the Tukey fences, ascending.
    Returns None for an empty bucket.
    """
    if not values:
        return None

    ordered = sorted(values)
    n = len(ordered)
    q1 = ordered[int(n * 0.25)]
    median = ordered[int(n * 0.5)]
    q3 = ordered[int(n * 0.75)]

    low, high = tukey_fences(q1, q3)
    outliers = [v for v in ordered if v < low or v > high]

    return Quartiles(
        q1=q1,
        median=median,
        q3=q3,
        min=ordered[0],
        max=ordered[-1],
        outliers=outliers,
    )
