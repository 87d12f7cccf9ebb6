"""Pressure-washing quote engine: distance and material risk adjusted pricing."""
