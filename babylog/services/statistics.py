"""Closed-form statistics used by the correlation engine.

Every function here is total over its documented input domain: sparse or
degenerate samples produce a conservative "no signal" value (coefficient 0,
p-value 1.0) instead of raising or returning NaN.
"""

import math
from collections.abc import Sequence

# Abramowitz & Stegun 7.1.26
_ERF_A1 = 0.254829592
_ERF_A2 = -0.284496736
_ERF_A3 = 1.421413741
_ERF_A4 = -1.453152027
_ERF_A5 = 1.061405429
_ERF_P = 0.3275911

# Chi-square is unreliable below this expected cell count
MIN_EXPECTED_COUNT = 5.0


def erf(x: float) -> float:
    """Error function approximation, accurate to about 1.5e-7."""
    sign = -1.0 if x < 0 else 1.0
    x = abs(x)

    t = 1.0 / (1.0 + _ERF_P * x)
    poly = ((((_ERF_A5 * t + _ERF_A4) * t + _ERF_A3) * t + _ERF_A2) * t + _ERF_A1) * t
    y = 1.0 - poly * math.exp(-x * x)

    return sign * y


def normal_cdf(x: float) -> float:
    """Standard normal cumulative distribution function."""
    return 0.5 * (1.0 + erf(x / math.sqrt(2.0)))


def student_t_cdf(t: float, df: float) -> float:
    """Student's t CDF, approximated by the normal CDF for every df.

    This under-estimates p-values when df is small (the test is liberal).
    It is good enough to flag whether a trend is worth a closer look.
    """
    return normal_cdf(t)


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def phi_coefficient(a: int, b: int, c: int, d: int) -> float:
    """Calculate the Phi coefficient for a 2x2 contingency table.

    Table layout:

                | Yes | No  | Total
        --------+-----+-----+------
        Group A |  a  |  b  | a+b
        Group B |  c  |  d  | c+d
        --------+-----+-----+------
        Total   | a+c | b+d |  n

    Returns:
        A value in [-1, 1]; 0 for an empty table or a zero margin.
    """
    n = a + b + c + d
    if n == 0:
        return 0.0

    denominator = math.sqrt(float((a + b) * (c + d) * (a + c) * (b + d)))
    if denominator == 0:
        return 0.0

    return _clamp((a * d - b * c) / denominator, -1.0, 1.0)


def chi_square_p_value(a: int, b: int, c: int, d: int) -> float:
    """Two-sided p-value of a Yates-corrected chi-square test (1 degree of freedom).

    Returns 1.0 when any expected count is below 5. Fisher's exact test would
    be the right tool there, but it needs factorials that overflow quickly.
    """
    n = a + b + c + d
    if n == 0:
        return 1.0

    cells = (
        (a, (a + b) * (a + c) / n),
        (b, (a + b) * (b + d) / n),
        (c, (c + d) * (a + c) / n),
        (d, (c + d) * (b + d) / n),
    )
    if any(expected < MIN_EXPECTED_COUNT for _, expected in cells):
        return 1.0

    chi_square = sum(
        max(0.0, abs(observed - expected) - 0.5) ** 2 / expected
        for observed, expected in cells
    )

    # chi-square with 1 dof is Z^2
    p_value = 2.0 * (1.0 - normal_cdf(math.sqrt(chi_square)))
    return _clamp(p_value, 0.0, 1.0)


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values)


def point_biserial_correlation(group1: Sequence[float], group0: Sequence[float]) -> float:
    """Point-biserial correlation between group membership and a measured value.

    Args:
        group1: Values observed for the binary category 1 (e.g. tagged events)
        group0: Values observed for the binary category 0

    Returns:
        Coefficient in [-1, 1]; 0 when a group is empty or the values do not vary.
    """
    n1 = len(group1)
    n0 = len(group0)
    n = n1 + n0
    if n <= 1 or n1 == 0 or n0 == 0:
        return 0.0

    mean1 = _mean(group1)
    mean0 = _mean(group0)

    # Population standard deviation (divide by n) of the pooled values
    pooled = [*group1, *group0]
    grand_mean = _mean(pooled)
    variance = sum((value - grand_mean) ** 2 for value in pooled) / n
    sd = math.sqrt(variance)
    if sd == 0:
        return 0.0

    coefficient = ((mean1 - mean0) / sd) * math.sqrt((n1 * n0) / (n * n))
    return _clamp(coefficient, -1.0, 1.0)


def welch_t_test_p_value(group1: Sequence[float], group0: Sequence[float]) -> float:
    """Two-sided p-value of Welch's t-test (unequal variances)."""
    n1 = len(group1)
    n0 = len(group0)
    if n1 < 2 or n0 < 2:
        return 1.0

    mean1 = _mean(group1)
    mean0 = _mean(group0)
    var1 = sum((value - mean1) ** 2 for value in group1) / (n1 - 1)
    var0 = sum((value - mean0) ** 2 for value in group0) / (n0 - 1)
    if var1 == 0 and var0 == 0:
        return 1.0

    se1 = var1 / n1
    se0 = var0 / n0
    t = abs(mean1 - mean0) / math.sqrt(se1 + se0)

    # Welch-Satterthwaite
    df = (se1 + se0) ** 2 / (se1**2 / (n1 - 1) + se0**2 / (n0 - 1))

    p_value = 2.0 * (1.0 - student_t_cdf(t, df))
    return _clamp(p_value, 0.0, 1.0)
