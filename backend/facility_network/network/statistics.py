from __future__ import annotations

import math
from statistics import mean, stdev
from typing import List

from facility_network.network.constants import (
    CONFIDENCE_Z_SCORE,
    LARGE_SAMPLE_MIN,
    MARGINAL_P,
    MIN_P_VALUE,
    SIGNIFICANT_P,
    SMALL_SAMPLE_P_VALUE,
    WHO_ACCESS_THRESHOLD_MIN,
)
from facility_network.shared.models import StatisticalAnalysis
from facility_network.shared.utils import round_half_up

# Abramowitz & Stegun 7.1.26 erf coefficients.
_A1 = 0.254829592
_A2 = -0.284496736
_A3 = 1.421413741
_A4 = -1.453152027
_A5 = 1.061405429
_P = 0.3275911


def normal_cdf(x: float) -> float:
    sign = -1.0 if x < 0 else 1.0
    x = abs(x) * math.sqrt(0.5)
    t = 1.0 / (1.0 + _P * x)
    y = 1.0 - (((((_A5 * t + _A4) * t) + _A3) * t + _A2) * t + _A1) * t * math.exp(-x * x)
    return 0.5 * (1.0 + sign * y)


def calculate_statistics(
    response_times: List[float],
    standard: float = WHO_ACCESS_THRESHOLD_MIN,
) -> StatisticalAnalysis:
    """
    One-sample test of the mean response time against the access standard.

    The p-value uses a normal approximation and is only computed for more
    than 30 samples; smaller samples report a fixed 0.05.
    """
    n = len(response_times)
    if n == 0:
        return StatisticalAnalysis(
            p_value=1.0,
            confidence_interval=(0.0, 0.0),
            effect_size=0.0,
            sample_size=0,
            standard_error=0.0,
            significance_level="not_significant",
        )

    average = mean(response_times)
    std_dev = stdev(response_times) if n > 1 else 0.0
    standard_error = std_dev / math.sqrt(n)

    confidence_interval = (
        max(0.0, average - CONFIDENCE_Z_SCORE * standard_error),
        average + CONFIDENCE_Z_SCORE * standard_error,
    )
    effect_size = (standard - average) / std_dev if std_dev > 0 else 0.0
    t_statistic = (average - standard) / standard_error if standard_error > 0 else 0.0

    if n > LARGE_SAMPLE_MIN:
        p_value = max(MIN_P_VALUE, min(1.0, 2 * (1 - normal_cdf(abs(t_statistic)))))
    else:
        p_value = SMALL_SAMPLE_P_VALUE

    return StatisticalAnalysis(
        p_value=p_value,
        confidence_interval=confidence_interval,
        effect_size=round_half_up(effect_size, 2),
        sample_size=n,
        standard_error=round_half_up(standard_error, 2),
        significance_level=significance_level(p_value),
    )


def significance_level(p_value: float) -> str:
    if p_value < SIGNIFICANT_P:
        return "significant"
    if p_value < MARGINAL_P:
        return "marginal"
    return "not_significant"
