"""
Integration tests package.

Contains integration tests that drive the Flask application through its
test client, from the HTTP endpoints down to the database.
"""
