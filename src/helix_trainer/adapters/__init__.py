"""Presentation-layer adapters for hosting a challenge session."""
