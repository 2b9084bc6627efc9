"""Test suite for the resmoke-suites package.

This package contains unit and integration tests validating suite
document parsing, serialization round trips, test selection overrides
and the command-line interface.
"""
