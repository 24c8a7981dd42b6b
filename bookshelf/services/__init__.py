"""
Services Package

Business logic kept separate from the GraphQL layer so it can be tested
directly against a session.

Current services:
- catalog.py: Book and author store operations behind the resolvers
"""
