"""Domain layer: entity schemas, events, errors, and pure rules.

This layer depends only on stdlib and pydantic.
It must never import from commands, infrastructure, or config.
"""
