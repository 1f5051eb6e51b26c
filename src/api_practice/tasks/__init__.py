"""
Task subsystem.

Components:
- task_models.py: the Task entity and its status state machine
- task_store.py: SQLite-backed TaskRepo implementation
"""
