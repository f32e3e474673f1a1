"""Domain layer: filter values, wire codecs, term trees, and selection rules.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
