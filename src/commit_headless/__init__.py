"""Replicate local git commits onto a GitHub branch through the REST API."""

__version__ = "0.4.0"
