"""Conversation thread operations."""

from wren_cli.models import DetailedThread, Thread
from wren_cli.services.base import BaseService, parse_as

LIST_THREADS = "query { threads { id summary } }"

GET_THREAD = """
query GetThread($threadId: Int!) {
  thread(threadId: $threadId) {
    id
    responses { id threadId question sql }
  }
}
"""

UPDATE_THREAD = """
mutation UpdateThread($where: ThreadUniqueWhereInput!, $data: UpdateThreadInput!) {
  updateThread(where: $where, data: $data) { id summary }
}
"""

DELETE_THREAD = """
mutation DeleteThread($where: ThreadUniqueWhereInput!) {
  deleteThread(where: $where)
}
"""


class ThreadService(BaseService):
    def list_threads(self) -> list[Thread]:
        data = self._query(LIST_THREADS)
        return parse_as(list[Thread], self._field(data, "threads") or [], "threads")

    def get_thread(self, thread_id: int) -> DetailedThread:
        data = self._query(GET_THREAD, {"threadId": thread_id})
        raw = self._record(data, "thread", f"thread {thread_id}")
        return parse_as(DetailedThread, raw, "thread")

    def rename_thread(self, thread_id: int, summary: str) -> Thread:
        variables = {"where": {"id": thread_id}, "data": {"summary": summary}}
        data = self._query(UPDATE_THREAD, variables)
        return parse_as(Thread, self._field(data, "updateThread"), "thread")

    def delete_thread(self, thread_id: int) -> None:
        self._query(DELETE_THREAD, {"where": {"id": thread_id}})
