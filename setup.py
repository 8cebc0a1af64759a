from setuptools import setup, find_packages

setup(
    name="ProPower",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*", "examples"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "pandas",
        "scipy",
    ],
    extras_require={
        "progress": ["tqdm"],
        "test": ["pytest", "tqdm"],
    },
    description="Sample size, power and Type S / Type M design analysis for survey proportions",
)
