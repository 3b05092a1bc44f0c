"""
Test suites package.

Kept importable so unit tests can share the in-memory fake driver and so
`run_tests.py` can target suites by path.
"""
