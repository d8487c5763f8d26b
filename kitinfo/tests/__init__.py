"""Test helpers and suites for kitinfo."""
