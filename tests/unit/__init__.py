"""Unit tests with simulated Discord objects."""
