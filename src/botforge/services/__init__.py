"""Service layer: catalog lookups, compatibility analysis, slot commands,
and assembly validation.

Services may import from domain and rules.
They must never import from commands, output, or cli.
"""
