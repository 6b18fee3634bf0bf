"""Smoke runner for a live responders deployment (python -m runner.smoke)."""
