"""Tests for initData parsing and data-check-string canonicalization."""

import json
from urllib.parse import urlencode

import pytest

from miniapp_verify.errors import HashMissing, MalformedPayload
from miniapp_verify.init_data import (
    build_data_check_string,
    canonicalize,
    parse_init_data,
    split_hash,
)


class TestParseInitData:
    def test_decodes_values(self):
        user = json.dumps({"id": 7, "first_name": "Ann"})
        params = parse_init_data(urlencode({"user": user, "auth_date": "1"}))
        assert params == {"user": user, "auth_date": "1"}

    def test_plus_is_space(self):
        assert parse_init_data("name=John+Doe") == {"name": "John Doe"}

    def test_keeps_blank_values(self):
        assert parse_init_data("a=&b=2") == {"a": "", "b": "2"}

    def test_empty_string(self):
        assert parse_init_data("") == {}

    def test_field_without_equals_is_malformed(self):
        with pytest.raises(MalformedPayload):
            parse_init_data("auth_date=1&garbage")

    def test_empty_field_is_malformed(self):
        with pytest.raises(MalformedPayload):
            parse_init_data("a=1&&b=2")

    def test_duplicate_key_is_malformed(self):
        with pytest.raises(MalformedPayload):
            parse_init_data("a=1&a=2&hash=abc")

    def test_value_may_contain_equals(self):
        assert parse_init_data("start_param=a%3Db") == {"start_param": "a=b"}


class TestSplitHash:
    def test_removes_hash(self):
        received, rest = split_hash({"a": "1", "hash": "ff"})
        assert received == "ff"
        assert rest == {"a": "1"}

    def test_does_not_mutate_input(self):
        params = {"a": "1", "hash": "ff"}
        split_hash(params)
        assert "hash" in params

    def test_missing_hash(self):
        with pytest.raises(HashMissing):
            split_hash({"a": "1"})

    def test_empty_hash(self):
        with pytest.raises(HashMissing):
            split_hash({"a": "1", "hash": ""})


class TestBuildDataCheckString:
    def test_sorted_order(self):
        params = {"b": "2", "a": "1", "c": "3"}
        assert build_data_check_string(params) == "a=1\nb=2\nc=3"

    def test_ordinal_sort(self):
        # Uppercase sorts before lowercase, underscore between them
        params = {"a": "1", "B": "2", "_": "3"}
        assert build_data_check_string(params) == "B=2\n_=3\na=1"

    def test_no_trailing_newline(self):
        assert not build_data_check_string({"a": "1", "b": "2"}).endswith("\n")

    def test_values_not_reencoded(self):
        assert build_data_check_string({"user": '{"id":1}'}) == 'user={"id":1}'

    def test_empty(self):
        assert build_data_check_string({}) == ""


class TestCanonicalize:
    def test_excludes_hash(self):
        payload = canonicalize("auth_date=1&query_id=AA&hash=deadbeef")
        assert payload.data_check_string == "auth_date=1\nquery_id=AA"
        assert payload.received_hash == "deadbeef"
        assert "hash" not in payload.params

    def test_keeps_signature_field(self):
        payload = canonicalize("auth_date=1&signature=xyz&hash=ab")
        assert payload.data_check_string == "auth_date=1\nsignature=xyz"

    def test_order_invariant(self):
        a = canonicalize("auth_date=1&query_id=AA&user=%7B%7D&hash=ab")
        b = canonicalize("hash=ab&user=%7B%7D&auth_date=1&query_id=AA")
        c = canonicalize("query_id=AA&hash=ab&auth_date=1&user=%7B%7D")
        assert a.data_check_string == b.data_check_string == c.data_check_string

    def test_missing_hash(self):
        with pytest.raises(HashMissing):
            canonicalize("auth_date=1&query_id=AA")
