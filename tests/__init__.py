"""Volcash tests."""
