"""
Task subsystem (server side).

Components:
- task_models.py: data structures (Task, Page)
- task_errors.py: NotFound / validation / transport failures
- task_store.py: in-memory authoritative store (ids, ordering)
- pagination.py: offset-cursor pages over the ordered view
- task_api.py: request boundary (validation + trimming) and the in-process backend
"""
