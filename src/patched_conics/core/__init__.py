"""Simulation core: bodies, craft and time."""
