"""
Test suite for the HR back office.

Run all tests: pytest
Run with coverage: pytest --cov=. --cov-report=html
Run unit tests only: pytest tests/unit/
Run specific file: pytest tests/unit/test_header_symbol_resolver.py -v
"""
