"""Repositories for billing persistence."""
