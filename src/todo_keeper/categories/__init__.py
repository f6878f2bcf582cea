"""
Category subsystem.

Components:
- category_models.py: the Category record
- registry.py: load/save of the taxonomy plus tree lookups
"""
