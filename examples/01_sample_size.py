"""
Sample Size Calculation Example
===============================

This example shows how to find the number of respondents needed to tell a
suspected proportion apart from a reference proportion.
"""

from propower import ProportionPower, compute_required_sample_size

# Example: Referendum poll
# Research question: is support different from an even split, if we suspect 60%?

print("=" * 60)
print("SAMPLE SIZE CALCULATION EXAMPLE")
print("=" * 60)

# 1. One-off calculation
n = compute_required_sample_size(
    reference_proportion=0.5,
    alternative_proportion=0.6,
    power_level=0.8,
)
print(f"\nRequired respondents (unrounded): {n:.1f}")

# 2. Model with a report
model = ProportionPower(reference_proportion=0.5, alternative_proportion=0.6)
model.find_sample_size(summary="long")

# 3. Higher power, verified by simulating surveys
print("\nHIGH POWER REQUIREMENT (95% power):")
model.set_power(0.95)
model.find_sample_size(simulate=True)

# 4. Rare outcome: 4% reference against a suspected 3%
print("\nRARE OUTCOME:")
rare = ProportionPower(reference_proportion=0.04, alternative_proportion=0.03)
rare.find_sample_size(simulate=True)

print(
    """
The 0.5 standard deviation is the largest a proportion can have, so these
sizes are upper bounds. Far from 50% the simulated power exceeds the target.
"""
)
