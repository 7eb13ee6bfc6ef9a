"""Operational entry points (python -m catalog.jobs.<name>)."""
