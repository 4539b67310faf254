import unittest
from types import SimpleNamespace

from postgrest.exceptions import APIError

from app.core.errors import TableNotFoundError, UpstreamError
from app.store.supabase_store import SupabaseStore


class _Query:
    def __init__(self, client, table):
        self.client = client
        self.table = table
        self.calls: list[tuple] = []

    def __getattr__(self, name):
        def record(*args, **kwargs):
            self.calls.append((name, args, kwargs))
            return self

        return record

    def execute(self):
        self.client.executed.append((self.table, self.calls))
        if self.client.error is not None:
            raise self.client.error
        return SimpleNamespace(data=self.client.rows.pop(0) if self.client.rows else [])


class FakeSupabase:
    def __init__(self, rows=None, error=None):
        self.rows = list(rows or [])
        self.error = error
        self.executed: list[tuple] = []

    def table(self, name):
        return _Query(self, name)


class SupabaseStoreTests(unittest.TestCase):
    def test_select_builds_ordered_range_query(self):
        fake = FakeSupabase(rows=[[{"id": 1}]])
        store = SupabaseStore("", "", client=fake)

        rows = store.select("projects", filters={"featured": True}, order_by="created_at", descending=True, limit=5, offset=10)

        self.assertEqual(rows, [{"id": 1}])
        table, calls = fake.executed[0]
        self.assertEqual(table, "projects")
        self.assertEqual(
            [(name, args, kwargs) for name, args, kwargs in calls],
            [
                ("select", ("*",), {}),
                ("eq", ("featured", True), {}),
                ("order", ("created_at",), {"desc": True}),
                ("range", (10, 14), {}),
            ],
        )

    def test_missing_table_is_translated(self):
        error = APIError({"message": 'relation "public.projects" does not exist', "code": "42P01"})
        store = SupabaseStore("", "", client=FakeSupabase(error=error))

        with self.assertRaises(TableNotFoundError):
            store.select("projects")

    def test_other_errors_are_upstream(self):
        error = APIError({"message": "permission denied", "code": "42501"})
        store = SupabaseStore("", "", client=FakeSupabase(error=error))

        with self.assertRaises(UpstreamError) as ctx:
            store.insert("contacts", {"name": "x"})
        self.assertNotIsInstance(ctx.exception, TableNotFoundError)
        self.assertEqual(ctx.exception.details, "permission denied")

    def test_increment_reads_then_writes(self):
        fake = FakeSupabase(rows=[[{"id": 1, "count": 41}], [{"id": 1, "count": 42}]])
        store = SupabaseStore("", "", client=fake)

        self.assertEqual(store.increment("api_visits", 1, "count"), 42)
        self.assertEqual(fake.executed[1][1][0], ("update", ({"count": 42},), {}))

    def test_increment_creates_missing_row(self):
        fake = FakeSupabase(rows=[[], [{"id": 1, "count": 1}]])
        store = SupabaseStore("", "", client=fake)

        self.assertEqual(store.increment("api_visits", 1, "count"), 1)
        self.assertEqual(fake.executed[1][1][0], ("insert", ({"id": 1, "count": 1},), {}))


if __name__ == "__main__":
    unittest.main()
