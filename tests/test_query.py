from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError
from tracker_mcp.models import StoryState
from tracker_mcp.query import (
    ActivityQuery,
    CommentsQuery,
    StoriesQuery,
    TaskQuery,
    format_timestamp,
)


def test_empty_stories_query_encodes_to_nothing():
    assert StoriesQuery().encode() == ""
    assert StoriesQuery().params() == {}


def test_query_by_state():
    assert StoriesQuery(state=StoryState.REJECTED).encode() == "with_state=rejected"


def test_query_by_state_accepts_plain_string():
    assert StoriesQuery(state="finished").encode() == "with_state=finished"


def test_query_by_label():
    assert StoriesQuery(label="blocked").encode() == "with_label=blocked"


def test_filter_single_clause():
    assert StoriesQuery(filter=["owner:dv"]).encode() == "filter=owner%3Adv"


def test_filter_multiple_clauses_join_with_space():
    query = StoriesQuery(filter=["owner:dv", "state:started"])
    assert query.params() == {"filter": "owner:dv state:started"}
    assert query.encode() == "filter=owner%3Adv+state%3Astarted"


def test_limit_and_offset():
    assert StoriesQuery(limit=33).encode() == "limit=33"
    assert StoriesQuery(offset=1234).encode() == "offset=1234"


def test_time_bounds_are_rfc3339():
    when = datetime(2015, 7, 20, 22, 50, 50, tzinfo=timezone.utc)
    query = StoriesQuery(created_after=when, accepted_before=when)
    assert query.params() == {
        "accepted_before": "2015-07-20T22:50:50Z",
        "created_after": "2015-07-20T22:50:50Z",
    }


def test_keys_are_sorted_regardless_of_field_order():
    when = datetime(2016, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    query = StoriesQuery(
        offset=5,
        limit=10,
        updated_before=when,
        label="x",
        state=StoryState.STARTED,
        filter=["owner:dv"],
    )
    assert list(query.params()) == sorted(query.params())
    assert query.encode() == (
        "filter=owner%3Adv&limit=10&offset=5"
        "&updated_before=2016-01-02T03%3A04%3A05Z&with_label=x&with_state=started"
    )


def test_equal_queries_encode_identically():
    a = StoriesQuery(label="x", limit=2, filter=["a:b", "c:d"])
    b = StoriesQuery(filter=["a:b", "c:d"], limit=2, label="x")
    assert a.encode() == b.encode()


def test_unknown_fields_rejected():
    with pytest.raises(ValidationError):
        StoriesQuery(colour="blue")


def test_format_timestamp_variants():
    assert format_timestamp(datetime(2020, 1, 1, 12, 0, 0, 999)) == "2020-01-01T12:00:00Z"
    plus_two = timezone(timedelta(hours=2))
    assert (
        format_timestamp(datetime(2020, 1, 1, 12, 0, 0, tzinfo=plus_two))
        == "2020-01-01T12:00:00+02:00"
    )


def test_activity_query():
    assert ActivityQuery().encode() == ""
    query = ActivityQuery(
        limit=2,
        offset=1,
        occurred_before=1433091819000,
        occurred_after=1000000000000,
        since_version=1,
    )
    assert query.encode() == (
        "limit=2&occurred_after=1000000000000&occurred_before=1433091819000"
        "&offset=1&since_version=1"
    )


def test_task_and_comment_queries_are_empty():
    assert TaskQuery().encode() == ""
    assert CommentsQuery().encode() == ""
