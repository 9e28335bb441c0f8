"""Retry engine, reason codes and conversion helpers."""
