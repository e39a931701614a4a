"""
Test suite for the CJ Fulfillment Bridge.

Run all tests: pytest
Run with coverage: pytest --cov=. --cov-report=html
Run unit tests only: pytest tests/unit/
Run specific file: pytest tests/unit/test_fulfillment_service.py -v
"""
