"""
Test suite for StockFlow.

Run all tests: pytest
Run unit tests only: pytest tests/unit/
Run specific file: pytest tests/unit/test_coverage_service.py -v
"""
