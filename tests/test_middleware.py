"""
Unit tests for request logging helpers
"""

from unittest.mock import MagicMock

import pytest

from socialgraph.logging import (
    clear_request_context,
    generate_request_id,
    operation_ctx,
    request_id_ctx,
    set_request_context,
)
from socialgraph.middleware import (
    incoming_request_id,
    operation_name_from_query,
    sanitize_query_params,
)


@pytest.mark.unit
class TestSanitizeQueryParams:
    def test_sensitive_keys_are_redacted(self):
        params = {"access_token": "abc", "API_KEY": "k", "page": "2"}

        assert sanitize_query_params(params) == {
            "access_token": "[REDACTED]",
            "API_KEY": "[REDACTED]",
            "page": "2",
        }

    def test_empty(self):
        assert sanitize_query_params({}) == {}


@pytest.mark.unit
class TestOperationName:
    @pytest.mark.parametrize(
        ("query", "expected"),
        [
            ("query GetUsers { users { id } }", "GetUsers"),
            ("mutation CreateUser($dto: CreateUserInput!) { createUser(dto: $dto) { id } }",
             "mutation:CreateUser"),
            ("mutation { createUser(dto: {name: \"a\", balance: 1}) { id } }",
             "mutation:unnamed_operation"),
            ("{ users { id } }", "unnamed_operation"),
            ("query IntrospectionQuery { __schema { types { name } } }", "__introspection"),
        ],
    )
    def test_operation_names(self, query, expected):
        assert operation_name_from_query(query) == expected


@pytest.mark.unit
class TestRequestId:
    @pytest.mark.parametrize(
        ("header", "expected"),
        [
            ("abc-123", "abc-123"),
            ("trace.id_7", "trace.id_7"),
            (None, None),
            ("", None),
            ("has space", None),
            ("x" * 65, None),
            ("line\nbreak", None),
            ("trailing\n", None),
        ],
    )
    def test_incoming_request_id(self, header, expected):
        request = MagicMock()
        request.headers = {} if header is None else {"X-Request-ID": header}

        assert incoming_request_id(request) == expected

    def test_generated_ids_are_distinct(self):
        first = generate_request_id()
        second = generate_request_id()

        assert len(first) == 32
        assert first != second


@pytest.mark.unit
class TestRequestContext:
    def test_set_and_clear(self):
        set_request_context(request_id="req-1", operation="GetUsers")

        assert request_id_ctx.get() == "req-1"
        assert operation_ctx.get() == "GetUsers"

        clear_request_context()

        assert request_id_ctx.get() is None
        assert operation_ctx.get() is None

    def test_request_id_is_generated_when_missing(self):
        set_request_context()

        assert request_id_ctx.get()

        clear_request_context()
