"""
Test configuration and shared fixtures for certificate tests.

This module provides common test utilities and fixtures used across
all test modules.
"""

import os
import sys

# Ensure parent directory is in path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


# Constants for test data
TEST_USER = {
    "firstName": "דביר",
    "lastName": "כהן",
    "privateNumber": "7600783",
    "idNumber": "308334127",
}

# Known test dates
TEST_ROSH_HASHANA_5786 = "2025-09-23"  # 1 Tishrei 5786
TEST_11_TEVET_5786 = "2025-12-31"  # 11 Tevet 5786
