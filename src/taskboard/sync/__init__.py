"""
Client-side sync subsystem.

Components:
- query_cache.py: cache entries with refresh tokens and mutation generations
- sync_client.py: reads, optimistic delete, create/update reconciliation
- poller.py: periodic refresh and the infinite-scroll page driver
"""
