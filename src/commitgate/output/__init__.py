"""Reporters — terminal, JSON, GitHub annotations."""
