"""Spa booking scheduling and fulfillment service."""
