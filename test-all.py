#!/usr/bin/env python3
"""Run the tests of every Day <N> directory next to this file.

Copy this launcher into the repository holding the Day directories.
"""

from day_runner.cli import main

if __name__ == "__main__":
    main()
