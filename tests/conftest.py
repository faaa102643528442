"""Shared pytest configuration and fixtures for fixerio tests."""

import sys
from pathlib import Path

# Ensure the fixerio package is importable when running tests from a checkout
sys.path.insert(0, str(Path(__file__).parent.parent))
