"""Mentorship session marketplace: token auth, session registry and booking engine."""

__version__ = "0.1.0"
