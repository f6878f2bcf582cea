"""
Task subsystem.

Components:
- task_models.py: the Task record and its wire shape
- lifecycle.py: active <-> trash transitions and permanent deletion
"""
