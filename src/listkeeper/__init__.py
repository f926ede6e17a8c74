"""
listkeeper: personal task lists.

Components:
- tasks/: task model, store, category views, JSON persistence
- core/: ports (interfaces) and AppState
- cli/: composition root, slash commands, entrypoint
- connectors/: console REPL
"""
