# LFSR Vault Test Suite
"""
Test suite including:
- Unit tests (keystream generator, stream cipher)
- Security tests (use before reset, invalid inputs)

Run with: pytest
Coverage: coverage run -m pytest && coverage report
"""
