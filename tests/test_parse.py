import io

import pytest

from dblib.term.helpers import DisplayOptions
from dblib.term.parse import parse_and_exec_queries, split_queries


class FakeExecer:
    def __init__(self, fail_on=None):
        self.queries = []
        self.fail_on = fail_on

    def generic_exec(self, query, args):
        self.queries.append(query)
        if query == self.fail_on:
            raise RuntimeError("boom")
        return None, None


def test_split_on_semicolons():
    assert split_queries("select 1; select 2") == ["select 1", " select 2"]


def test_trailing_semicolon_adds_no_query():
    assert split_queries("select 1;") == ["select 1"]


def test_semicolon_in_quotes_is_kept():
    assert split_queries("select ';' ; select \"a;b\"") == ["select ';' ", ' select "a;b"']


def test_empty_statements_are_kept():
    assert split_queries("a;;b") == ["a", "", "b"]


def test_empty_line_has_no_queries():
    assert split_queries("") == []


def test_queries_are_executed_in_order():
    execer = FakeExecer()
    line = "select 1; select 2;"
    parse_and_exec_queries(execer, line, DisplayOptions(), io.StringIO())
    assert execer.queries == split_queries(line)


def test_failure_stops_execution():
    execer = FakeExecer(fail_on="bad")
    with pytest.raises(RuntimeError):
        parse_and_exec_queries(execer, "bad;good", DisplayOptions(), io.StringIO())
    assert execer.queries == ["bad"]