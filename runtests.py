# -*- coding: utf-8 -*-
"""Run all tests for `currypot`.

Equivalent to running `pytest` on `currypot/tests` from the repository root.
"""

import os
import sys

import pytest

def main():
    here = os.path.dirname(os.path.abspath(__file__))
    return pytest.main([os.path.join(here, "currypot", "tests")] + sys.argv[1:])

if __name__ == '__main__':
    sys.exit(main())
