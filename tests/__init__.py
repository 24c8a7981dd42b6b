"""
Test Suite for the Bookshelf API

Test Organization:
- conftest.py: Shared fixtures (test database, client, sample data)
- test_graphql.py: Tests for the /graphql endpoint
- test_catalog.py: Tests for the catalog service
- test_database.py: Tests for the Database object and app startup

Running Tests:
    pytest
    pytest tests/test_graphql.py -v
"""
