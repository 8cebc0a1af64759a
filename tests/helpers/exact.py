"""
Exact binomial power of the directional survey test.

Single source of truth — imported by specs/ and unit tests.
"""

import math

from scipy.stats import binom


def exact_binomial_power(reference, alternative, n, threshold):
    """
    Probability that a Binomial(n, alternative) survey rejects the reference.

    The test rejects when the estimated proportion lies strictly beyond
    *threshold* on the side of the alternative.
    """
    if alternative > reference:
        k = math.floor(threshold * n)
        return float(binom.sf(k, n, alternative))
    k = math.ceil(threshold * n) - 1
    return float(binom.cdf(k, n, alternative))
