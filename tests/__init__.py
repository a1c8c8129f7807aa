# LCG Lab Test Suite
"""
Comprehensive test suite including:
- Unit tests
- Integration tests
- Invalid input tests

Run with: pytest
Coverage: coverage run -m pytest && coverage report
"""
