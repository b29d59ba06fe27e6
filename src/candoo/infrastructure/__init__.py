"""Infrastructure layer: activity-log persistence.

This layer depends on the domain event models, the config section models,
and SQLAlchemy. It must never import from commands.
"""
