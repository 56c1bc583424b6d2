"""Tests - algebraic_hash test suite and shared test data."""
