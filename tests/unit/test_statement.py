"""Unit tests for Statement."""

from __future__ import annotations

import dataclasses

import pytest

from row_keys.core.context import StatementContext
from row_keys.core.cursor import KeyCursor
from row_keys.core.exceptions import ExecutionError, ResultTraversalError
from row_keys.core.statement import Statement
from tests.fakes import FakeAdapter, FakeConnection, FakeCursor, FakeDriverError


@pytest.fixture
def adapter() -> FakeAdapter:
    return FakeAdapter(FakeCursor([(1,)]))


@pytest.fixture
def connection() -> FakeConnection:
    return FakeConnection()


class TestStatement:
    def test_execute_registers_cursor(
        self, adapter: FakeAdapter, connection: FakeConnection, statement_context
    ) -> None:
        statement = Statement(connection, adapter, statement_context).execute()
        statement.cleanup()
        assert adapter.statement_cursor.close_count == 1

    def test_execute_twice_fails(
        self, adapter: FakeAdapter, connection: FakeConnection, statement_context
    ) -> None:
        statement = Statement(connection, adapter, statement_context).execute()
        with pytest.raises(ExecutionError, match="already executed"):
            statement.execute()

    def test_keys_before_execute_fails(
        self, adapter: FakeAdapter, connection: FakeConnection, statement_context
    ) -> None:
        statement = Statement(connection, adapter, statement_context)
        with pytest.raises(ExecutionError, match="not been executed"):
            statement.generated_keys_cursor()

    def test_generated_keys_cursor_is_fresh_each_call(
        self, adapter: FakeAdapter, connection: FakeConnection, statement_context
    ) -> None:
        statement = Statement(connection, adapter, statement_context).execute()
        first = statement.generated_keys_cursor()
        second = statement.generated_keys_cursor()
        assert isinstance(first, KeyCursor)
        assert first is not second

    def test_no_generated_keys(self, connection: FakeConnection, statement_context) -> None:
        statement = Statement(connection, FakeAdapter(None), statement_context).execute()
        assert statement.generated_keys_cursor() is None

    def test_autocommit_commits_once(
        self, adapter: FakeAdapter, connection: FakeConnection, statement_context
    ) -> None:
        statement = Statement(connection, adapter, statement_context, autocommit=True).execute()
        statement.cleanup()
        statement.cleanup()
        assert connection.commit_count == 1

    def test_no_commit_without_autocommit(
        self, adapter: FakeAdapter, connection: FakeConnection, statement_context
    ) -> None:
        statement = Statement(connection, adapter, statement_context).execute()
        statement.cleanup()
        assert connection.commit_count == 0

    def test_failed_execute_does_not_commit(
        self, adapter: FakeAdapter, connection: FakeConnection, statement_context
    ) -> None:
        adapter.execute_error = FakeDriverError("syntax error")
        statement = Statement(connection, adapter, statement_context, autocommit=True)
        with pytest.raises(FakeDriverError):
            statement.execute()
        statement.cleanup()
        assert connection.commit_count == 0

    def test_cleanup_failure_is_wrapped(
        self, adapter: FakeAdapter, connection: FakeConnection, statement_context
    ) -> None:
        adapter.statement_cursor.fail_on_close = True
        statement = Statement(connection, adapter, statement_context, autocommit=True).execute()

        with pytest.raises(ResultTraversalError) as exc_info:
            statement.cleanup()

        assert exc_info.value.context is statement_context
        assert isinstance(exc_info.value.cause, FakeDriverError)
        assert connection.commit_count == 1
        statement.cleanup()

    def test_context_manager_cleans_up(
        self, adapter: FakeAdapter, connection: FakeConnection, statement_context
    ) -> None:
        with Statement(connection, adapter, statement_context) as statement:
            statement.execute()
        assert statement.closed

    def test_rowcount(self, adapter: FakeAdapter, connection: FakeConnection) -> None:
        context = StatementContext(sql="UPDATE users SET name = 'x'")
        statement = Statement(connection, adapter, context)
        assert statement.rowcount == -1
        statement.execute()
        assert statement.rowcount == 0

    def test_execute_after_cleanup_fails(
        self, adapter: FakeAdapter, connection: FakeConnection, statement_context
    ) -> None:
        statement = Statement(connection, adapter, statement_context)
        statement.cleanup()
        with pytest.raises(ExecutionError, match="closed"):
            statement.execute()

    def test_keys_cursor_closed_once_across_wrappers(
        self, adapter: FakeAdapter, connection: FakeConnection, statement_context
    ) -> None:
        statement = Statement(connection, adapter, statement_context).execute()
        first = statement.generated_keys_cursor()
        second = statement.generated_keys_cursor()
        first.close()
        second.close()
        assert adapter.keys_cursor.close_count == 0

        statement.cleanup()
        assert adapter.keys_cursor.close_count == 1
        assert adapter.statement_cursor.close_count == 1

    def test_returning_cursor_closed_once(
        self, connection: FakeConnection, statement_context
    ) -> None:
        adapter = FakeAdapter(FakeCursor([(1,)]), returning=True)
        statement = Statement(connection, adapter, statement_context).execute()
        statement.generated_keys_cursor()
        statement.generated_keys_cursor()
        statement.cleanup()
        assert adapter.statement_cursor is adapter.keys_cursor
        assert adapter.statement_cursor.close_count == 1

    def test_keys_cursor_after_cleanup_is_released(
        self, adapter: FakeAdapter, connection: FakeConnection, statement_context
    ) -> None:
        statement = Statement(connection, adapter, statement_context).execute()
        statement.cleanup()
        adapter.keys_cursor = FakeCursor([(2,)])
        statement.generated_keys_cursor()
        assert adapter.keys_cursor.close_count == 1


class TestStatementAbort:
    def test_rolls_back_autocommit(
        self, adapter: FakeAdapter, connection: FakeConnection, statement_context
    ) -> None:
        statement = Statement(connection, adapter, statement_context, autocommit=True).execute()
        statement.abort()
        assert statement.closed
        assert adapter.statement_cursor.close_count == 1
        assert connection.rollback_count == 1
        assert connection.commit_count == 0

    def test_leaves_caller_transaction_alone(
        self, adapter: FakeAdapter, connection: FakeConnection, statement_context
    ) -> None:
        statement = Statement(connection, adapter, statement_context).execute()
        statement.abort()
        assert statement.closed
        assert connection.rollback_count == 0

    def test_after_cleanup_is_noop(
        self, adapter: FakeAdapter, connection: FakeConnection, statement_context
    ) -> None:
        statement = Statement(connection, adapter, statement_context, autocommit=True).execute()
        statement.cleanup()
        statement.abort()
        assert connection.commit_count == 1
        assert connection.rollback_count == 0


class TestStatementContext:
    def test_is_frozen(self, statement_context: StatementContext) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            statement_context.label = "other"  # type: ignore[misc]

    def test_attributes_are_read_only(self, statement_context: StatementContext) -> None:
        with pytest.raises(TypeError):
            statement_context.attributes["request_id"] = "req-2"  # type: ignore[index]
        assert statement_context.attribute("request_id") == "req-1"
        assert statement_context.attribute("missing", "fallback") == "fallback"

    def test_defaults(self) -> None:
        context = StatementContext(sql="INSERT INTO t DEFAULT VALUES")
        assert context.label == "<inline>"
        assert context.params is None
        assert dict(context.attributes) == {}
