"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskKind, TaskResult, AgeStats, WorkerState)
- task_handlers.py: save/load/display/analyze implementations
- task_worker.py: the single background worker thread and its FIFO queue
"""
