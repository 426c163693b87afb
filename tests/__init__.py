"""
Test suite for Feature Cluster.

This package contains all tests organized by component:
- test_algorithms/: Tests for points, distances and the clustering strategies
- test_config.py, test_io.py, test_cli.py: Configuration, CSV loading and CLI
"""
