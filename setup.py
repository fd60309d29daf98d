from setuptools import setup, find_packages

setup(
    name="patternscan",
    version="0.1.0",
    description="Rabin-Karp exact pattern matching with a suffix-array baseline and benchmark driver",
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={"patternscan.config": ["bench.conf"]},
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.22",
        "pandas>=1.4",
        "matplotlib>=3.5",
        "psutil>=5.9",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "patternscan-bench=patternscan.benchmarks.run_benchmarks:main",
        ],
    },
)
