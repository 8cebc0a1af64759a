"""
Design Analysis Example
=======================

Shows how an underpowered survey produces significant estimates that get
the sign wrong (Type S) or exaggerate the effect (Type M).
"""

from propower import ProportionPower, design_analysis

print("=" * 60)
print("TYPE S / TYPE M DESIGN ANALYSIS")
print("=" * 60)

model = ProportionPower(reference_proportion=0.5, alternative_proportion=0.52)

# 1. A small survey: significant results are badly exaggerated
model.find_design_errors(sample_size=100)

# 2. The size the power analysis asks for
required = model.find_sample_size(return_results=True, print_results=False)
model.find_design_errors(sample_size=required["results"]["rounded_sample_size"], summary="long")

# 3. Generic effect and standard error
result = design_analysis(true_effect=0.1, standard_error=3.28)
print(
    f"\nTiny effect, noisy estimate: power {result['power']:.1%}, "
    f"Type S {result['type_s']:.1%}, exaggeration {result['type_m']:.0f}x"
)
