"""day-runner - run each ``Day <N>`` project's test suite in order."""

__version__ = "0.1.0"
