"""Resolver functions used by the root types."""
