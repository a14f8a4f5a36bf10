"""
Test Suite for crud-app

Test Organization:
- conftest.py: Shared fixtures (test database, client, sample data)
- test_books.py: Tests for the /books endpoints
- test_auth.py: Tests for the /auth endpoints
- test_update_builder.py: Tests for the partial UPDATE builder
- test_services.py: Tests for the services with fake repositories
- test_repositories.py: Tests for the repositories against SQLite
- test_config.py: Tests for settings validation
- test_health.py: Tests for /health and log formatting
- test_main.py: Tests for startup checks and the server runner

Running Tests:
    # Run all tests
    pytest

    # Run specific file
    pytest tests/test_books.py

    # Run with verbose output
    pytest -v
"""
