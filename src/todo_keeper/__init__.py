"""
todo_keeper: local persistence for a desktop task list.

Three JSON collections (todos.json, trash.json, categories.json) in a per-user
data directory, with trash/restore lifecycle rules on top.
"""

__version__ = "0.1.0"
