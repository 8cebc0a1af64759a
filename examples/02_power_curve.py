"""
Power Curve Example
===================

Evaluates power over a range of survey sizes and tabulates required sizes
for several suspected proportions.
"""

from propower import ProportionPower

print("=" * 60)
print("POWER CURVE EXAMPLE")
print("=" * 60)

model = ProportionPower(reference_proportion=0.5, alternative_proportion=0.6)

# 1. Power at a fixed budget of 150 respondents
model.find_power(sample_size=150)

# 2. Power from 50 to 400 respondents
model.find_power_curve(from_size=50, to_size=400, by=25, summary="long")

# 3. Grid of required sizes
grid = model.sample_size_grid(
    alternatives=[0.52, 0.55, 0.6, 0.65],
    power_levels=[0.8, 0.9, 0.95],
)
print("\nRequired sizes:")
print(grid[["alternative_proportion", "power_level", "rounded_sample_size"]].to_string(index=False))
