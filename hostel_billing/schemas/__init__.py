"""Pydantic schemas for the billing engine."""
