# src/taskboard/sync/sync_client.py

from __future__ import annotations

"""
Client-side synchronization with the task backend.

Two list views are cached:
- regular: the whole ordered list under LIST_KEY
- infinite: an ordered list of Pages under pages_key(page_size), flattened for display

Mutation rules:
- delete is optimistic (filter locally, roll back to the snapshot on failure)
- create injects the returned task at the head of the regular list
- update only invalidates (detail + lists), nothing is applied locally
"""

import logging
from collections.abc import Callable

from ..core.ports import Notifier, TaskBackend
from ..tasks.pagination import clamp_limit
from ..tasks.task_errors import TaskError
from ..tasks.task_models import Page, Task
from .query_cache import LIST_KEY, PAGES_PREFIX, QueryCache, pages_key, task_key

logger = logging.getLogger(__name__)

SettleListener = Callable[[], None]


class LogNotifier:
    """Fallback Notifier: writes banners into the log."""

    def success(self, text: str) -> None:
        logger.info("%s", text)

    def error(self, text: str) -> None:
        logger.warning("%s", text)


class SyncClient:
    def __init__(
        self,
        backend: TaskBackend,
        notifier: Notifier | None = None,
        *,
        page_size: int = 10,
        infinite: bool = False,
    ) -> None:
        self._backend = backend
        self._notifier: Notifier = notifier or LogNotifier()
        self.cache = QueryCache()
        self.page_size = clamp_limit(page_size)
        self.infinite = bool(infinite)

        self._fetching_next = False
        self._settle_listeners: list[SettleListener] = []

    # ---- view state ----

    @property
    def pages_key(self):
        return pages_key(self.page_size)

    @property
    def active_key(self):
        return self.pages_key if self.infinite else LIST_KEY

    @property
    def is_fetching_next_page(self) -> bool:
        return self._fetching_next

    def set_infinite(self, enabled: bool) -> None:
        if self.infinite == bool(enabled):
            return
        self.infinite = bool(enabled)
        # Paged views always start clean when (re)entered.
        self.cache.remove(self.pages_key)
        logger.info("List view mode -> %s", "infinite" if self.infinite else "regular")

    def mount(self) -> None:
        """List view (re)opened: make the next read hit the backend."""
        self.cache.invalidate(LIST_KEY)

    def invalidate(self, *prefixes: tuple) -> None:
        for prefix in prefixes or (LIST_KEY, PAGES_PREFIX):
            self.cache.invalidate(prefix)

    def add_settle_listener(self, listener: SettleListener) -> None:
        self._settle_listeners.append(listener)

    def remove_settle_listener(self, listener: SettleListener) -> None:
        if listener in self._settle_listeners:
            self._settle_listeners.remove(listener)

    def _settled(self) -> None:
        for listener in list(self._settle_listeners):
            try:
                listener()
            except Exception:
                logger.exception("Settle listener failed.")

    # ---- reads ----

    async def refresh_list(self) -> bool:
        token = self.cache.begin_fetch(LIST_KEY)
        try:
            tasks = await self._backend.list()
        except Exception:
            self.cache.abort_fetch(LIST_KEY, token)
            raise
        return self.cache.finish_fetch(LIST_KEY, token, tasks)

    async def refresh_pages(self) -> bool:
        """Refetch every loaded page from cursor 0, following the fresh cursors."""
        key = self.pages_key
        loaded = self.cache.get_data(key) or []
        want = max(1, len(loaded))

        token = self.cache.begin_fetch(key)
        pages: list[Page] = []
        cursor = 0
        try:
            for _ in range(want):
                page = await self._backend.list_paginated(limit=self.page_size, cursor=cursor)
                pages.append(page)
                if page.next_cursor is None:
                    break
                cursor = page.next_cursor
        except Exception:
            self.cache.abort_fetch(key, token)
            raise
        return self.cache.finish_fetch(key, token, pages)

    async def refresh(self, *, force: bool = True) -> bool:
        """
        Refresh the active list view.

        force=False only refreshes when the view was invalidated. Nothing is
        fetched while an optimistic mutation on the view is unsettled.
        """
        key = self.active_key
        if self.cache.is_pending(key):
            return False
        if not force and not self.cache.is_stale(key):
            return False
        if self.infinite:
            return await self.refresh_pages()
        return await self.refresh_list()

    async def get_list(self) -> list[Task]:
        if self.cache.is_stale(LIST_KEY) and not self.cache.is_pending(LIST_KEY):
            await self.refresh_list()
        return list(self.cache.get_data(LIST_KEY) or [])

    async def get_pages(self) -> list[Page]:
        key = self.pages_key
        if self.cache.is_stale(key):
            await self.refresh_pages()
        return list(self.cache.get_data(key) or [])

    async def visible_tasks(self) -> list[Task]:
        if not self.infinite:
            return await self.get_list()
        return [task for page in await self.get_pages() for task in page.items]

    async def get_task(self, task_id: str) -> Task:
        """Detail read; TaskNotFoundError propagates to the caller."""
        key = task_key(task_id)
        if not self.cache.is_stale(key):
            return self.cache.get_data(key)

        token = self.cache.begin_fetch(key)
        try:
            task = await self._backend.get_by_id(task_id)
        except Exception:
            self.cache.abort_fetch(key, token)
            raise
        self.cache.finish_fetch(key, token, task)
        return task

    def has_next_page(self) -> bool:
        pages = self.cache.get_data(self.pages_key) or []
        return bool(pages) and pages[-1].has_more

    async def fetch_next_page(self) -> bool:
        """
        Append the next page to the infinite view.

        Never issues two requests for the same next cursor at once. A page whose
        basis changed while it was in flight (the view was reset or refreshed to a
        different tail) is dropped.
        """
        if self._fetching_next:
            return False

        key = self.pages_key
        pages = self.cache.get_data(key) or []
        if not pages or not pages[-1].has_more:
            return False
        cursor = pages[-1].next_cursor

        self._fetching_next = True
        try:
            page = await self._backend.list_paginated(limit=self.page_size, cursor=cursor)
        finally:
            self._fetching_next = False

        current = self.cache.get_data(key) or []
        if not current or current[-1].next_cursor != cursor:
            logger.debug("Next page dropped cursor=%s (view changed)", cursor)
            return False

        # An older full refresh would bring back fewer pages.
        self.cache.cancel(key)
        self.cache.set_data(key, [*current, page])
        logger.debug("Page appended cursor=%s items=%s", cursor, len(page.items))
        return True

    # ---- mutations ----

    async def create_task(self, title: str, description: str | None = None) -> Task:
        try:
            task = await self._backend.create(title, description)
        except Exception as e:
            self._report_failure("create", e, str(e))
            raise

        # Applied on top of any pending optimistic delete. If that delete fails, its
        # rollback restores the pre-delete snapshot and the new task is hidden until
        # the next refresh.
        self.cache.update_data(
            LIST_KEY, lambda old: [task, *(t for t in old if t.id != task.id)]
        )
        self.cache.invalidate(PAGES_PREFIX)
        self._notifier.success("Task created successfully")
        self._settled()
        return task

    async def update_task(self, task_id: str, title: str, description: str | None = None) -> Task:
        try:
            task = await self._backend.update(task_id, title, description)
        except Exception as e:
            self._report_failure("update", e, str(e))
            raise

        self.cache.invalidate(task_key(task_id))
        self.cache.invalidate(LIST_KEY)
        self.cache.invalidate(PAGES_PREFIX)
        self._notifier.success("Task updated successfully")
        self._settled()
        return task

    async def delete_task(self, task_id: str) -> bool:
        """
        Optimistic delete.

        The task disappears from the regular list right away. On failure the list
        goes back to the exact snapshot taken before the delete, unless a newer
        mutation on the list started meanwhile (its optimistic view wins).
        """
        gen = self.cache.begin_mutation(LIST_KEY)
        snapshot = self.cache.get_data(LIST_KEY)
        if snapshot is not None:
            self.cache.set_data(LIST_KEY, [t for t in snapshot if t.id != task_id])

        try:
            await self._backend.delete(task_id)
        except Exception as e:
            if self.cache.settle(LIST_KEY, gen):
                self.cache.set_data(LIST_KEY, snapshot)
            self._report_failure("delete", e, f"Failed to delete: {e}")
            self._settled()
            return False

        latest = self.cache.settle(LIST_KEY, gen)
        self.cache.remove(task_key(task_id))
        self._notifier.success("Task deleted successfully")

        if latest:
            try:
                await self.refresh_list()
                if self.infinite:
                    await self.refresh_pages()
            except Exception:
                logger.exception("Refetch after delete failed task_id=%s", task_id)

        self._settled()
        return True

    def _report_failure(self, op: str, exc: Exception, text: str) -> None:
        if isinstance(exc, TaskError):
            logger.info("%s failed: %s", op, exc)
        else:
            logger.exception("%s failed", op)
        self._notifier.error(text)
