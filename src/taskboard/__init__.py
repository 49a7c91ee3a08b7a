# src/taskboard/__init__.py
"""
Taskboard
=========
A small REST service for kanban tasks.

Tasks move between three columns ("A Fazer", "Em Progresso", "Concluído")
and are kept in memory, optionally mirrored to a JSON snapshot file.

Import Guide:
-------------
Models:
    from taskboard.models import Task, TaskPayload, TaskStatus

Storage:
    from taskboard.repository import InMemoryTaskRepository, JsonFileTaskRepository

Application:
    from taskboard.main import create_app
"""

__version__ = "1.0.0"
