"""
Task subsystem.

Components:
- task_models.py: data structures (Task, Category, Priority, StoreResult)
- task_codec.py: dict wire format + normalization of untrusted records
- task_store.py: in-memory store, the only writer of task state
- category_view.py: pure per-list filtering and counting
- persistence.py: JSON task file + background saver
"""
