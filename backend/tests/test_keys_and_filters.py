from __future__ import annotations

import pytest
from boto3.dynamodb.conditions import ConditionExpressionBuilder

from medtracker.core.enums import EventKind
from medtracker.services.dates import PointQuery, RangeQuery
from medtracker.services.filters import build_lookup_query, build_point_query, build_range_query
from medtracker.services.keys import InvalidSubjectNameError, build_subject_key


def _render(condition, *, is_key_condition: bool) -> tuple[str, dict, dict]:
    built = ConditionExpressionBuilder().build_expression(condition, is_key_condition=is_key_condition)
    return (
        built.condition_expression,
        built.attribute_name_placeholders,
        built.attribute_value_placeholders,
    )


def test_subject_key_joins_caller_and_name():
    assert build_subject_key("U1", "Bob") == "U1#Bob"
    assert build_subject_key("U1", "Bob") == build_subject_key("U1", "Bob")


@pytest.mark.parametrize(
    "left, right",
    [
        (("U1", "Bob"), ("U1", "Alice")),
        (("U1", "Bob"), ("U2", "Bob")),
        (("U1", "Bob Smith"), ("U1 Bob", "Smith")),
    ],
)
def test_subject_keys_differ_for_different_pairs(left, right):
    assert build_subject_key(*left) != build_subject_key(*right)


def test_subject_name_with_separator_is_rejected():
    with pytest.raises(InvalidSubjectNameError):
        build_subject_key("U1", "Bob#2")


def test_point_query_matches_subject_and_date_prefix():
    query = build_point_query("U1#Bob", PointQuery(prefix="06/15/2024"))
    assert query.filter_expression is None

    expression, names, values = _render(query.key_condition, is_key_condition=True)
    assert "begins_with" in expression
    assert sorted(names.values()) == ["date", "userid"]
    assert sorted(values.values()) == ["06/15/2024", "U1#Bob"]


def test_range_query_uses_greater_than_lower_bound():
    query = build_range_query("U1#Bob", RangeQuery(lower_bound="06/10/2024, 14:30:05", period_label="5 days"))
    expression, _, values = _render(query.key_condition, is_key_condition=True)
    assert ">" in expression
    assert "06/10/2024, 14:30:05" in values.values()
    assert query.as_query_kwargs() == {"KeyConditionExpression": query.key_condition}


def test_lookup_query_for_activity_filters_on_label():
    query, target = build_lookup_query("U1#Bob", activity="physical therapy")
    assert target.kind is EventKind.ACTIVITY
    assert target.term == "physical therapy"

    expression, names, values = _render(query.filter_expression, is_key_condition=False)
    assert expression.startswith("contains(")
    assert list(names.values()) == ["event"]
    assert list(values.values()) == ["physical therapy"]


def test_lookup_query_for_medicine_uses_synthesized_label():
    query, target = build_lookup_query("U1#Bob", medicine="Aspirin")
    assert target.kind is EventKind.MEDICINE
    assert target.term == "Aspirin"
    _, _, values = _render(query.filter_expression, is_key_condition=False)
    assert list(values.values()) == ["Medicine Given - Aspirin"]


def test_lookup_query_prefers_activity_over_medicine():
    query, target = build_lookup_query("U1#Bob", activity="nap", medicine="Aspirin")
    assert target.kind is EventKind.ACTIVITY
    _, _, values = _render(query.filter_expression, is_key_condition=False)
    assert list(values.values()) == ["nap"]


def test_lookup_query_without_discriminator_has_no_filter():
    query, target = build_lookup_query("U1#Bob")
    assert target.kind is None
    assert "FilterExpression" not in query.as_query_kwargs()


def test_query_construction_is_deterministic():
    first = build_point_query("U1#Bob", PointQuery(prefix="06/15/2024"))
    second = build_point_query("U1#Bob", PointQuery(prefix="06/15/2024"))
    assert _render(first.key_condition, is_key_condition=True) == _render(
        second.key_condition, is_key_condition=True
    )
