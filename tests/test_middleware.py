"""Tests for request logging helpers."""

import pytest

from phonebook.middleware import operation_name_from_payload, sanitize_query_params


class TestSanitizeQueryParams:
    def test_redacts_sensitive_keys(self):
        params = {"token": "abc", "Authorization": "Bearer x", "page": "2", "user_password": "p"}

        assert sanitize_query_params(params) == {
            "token": "[REDACTED]",
            "Authorization": "[REDACTED]",
            "page": "2",
            "user_password": "[REDACTED]",
        }

    def test_empty(self):
        assert sanitize_query_params({}) == {}


class TestOperationName:
    @pytest.mark.parametrize(
        ("payload", "expected"),
        [
            ({"operationName": "AllPersons", "query": "query Other { personCount }"}, "AllPersons"),
            ({"query": "query FindPerson($name: String!) { findPerson(name: $name) { id } }"}, "FindPerson"),
            ({"query": "mutation AddBook { addBook { title } }"}, "mutation:AddBook"),
            ({"query": "subscription OnPerson { personAdded { name } }"}, "subscription:OnPerson"),
            ({"query": "mutation { login { value } }"}, "mutation:unnamed_operation"),
            ({"query": "{ personCount }"}, "unnamed_operation"),
            ({"query": "query IntrospectionQuery { __schema { types { name } } }"}, "__introspection"),
            ({}, None),
            ({"query": 42}, None),
        ],
    )
    def test_operation_name(self, payload, expected):
        assert operation_name_from_payload(payload) == expected
