"""Setup configuration for day-runner."""

from setuptools import setup, find_packages

setup(
    name="day-runner",
    version="0.1.0",
    description="Runs the test suite of every Day <N> project directory, fail-fast",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "click>=8.1.0",
        "pyyaml>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "day-runner=day_runner.cli:main",
        ],
    },
)
