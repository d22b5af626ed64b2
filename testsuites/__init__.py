"""
Test suites package.

Kept importable so `run_tests.py` and IDEs can resolve test modules and the
shared fixtures in `testsuites/unit/conftest.py`.
"""
