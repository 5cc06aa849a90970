"""Resolve workflow."""
