"""
Distributed DCR Test Suite
==========================

Test organization:
- tests/unit/       - Shared library tests (config, repository client)
- tests/services/   - Per-service tests

Run tests:
    pytest                          # All tests
    pytest tests/unit               # Shared library only
    pytest --cov=services           # With coverage
"""
