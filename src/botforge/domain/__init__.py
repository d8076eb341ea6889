"""Domain layer: types, static slot tables, and value models.

This layer depends only on stdlib and pydantic.
It must never import from services, rules, config, commands, or plugins.
"""
