"""Helpers shared across registry clients and resolvers."""
