"""
Validation selector tests - rules picked per operation, violations returned not raised.
"""

import pytest

from listings_api.db.models import User
from listings_api.resources.contexts import Context
from listings_api.resources.draft import ListingDraft
from listings_api.resources.validation import (
    INTEGER_MAX,
    INTEGER_MIN,
    Range,
    Rule,
    UnresolvedReference,
    Violation,
    validate,
)

MINIMUM_MESSAGE = "Minimum 5 chars."
BLANK_MESSAGE = "This value should not be blank."


@pytest.fixture
def user() -> User:
    return User(id=1, email="seller@cheesemarket.com", full_name="Cheese Seller")


def _draft(user, **overrides) -> ListingDraft:
    values = {"title": "Brie Lovers", "price": 1000, "owner": user}
    values.update(overrides)
    return ListingDraft(**values)


def _messages(violations, field):
    return [v.message for v in violations if v.field == field]


def test_valid_draft_passes_both_contexts(user):
    assert validate(_draft(user), Context.CREATE) == []
    assert validate(_draft(user), Context.UPDATE) == []


@pytest.mark.parametrize("length", [5, 30])
def test_create_accepts_title_length_bounds(user, length):
    assert validate(_draft(user, title="x" * length), Context.CREATE) == []


def test_create_rejects_four_char_title_with_minimum_message(user):
    violations = validate(_draft(user, title="Brie"), Context.CREATE)
    assert violations == [Violation("title", MINIMUM_MESSAGE)]


def test_create_rejects_31_char_title(user):
    violations = validate(_draft(user, title="x" * 31), Context.CREATE)
    assert _messages(violations, "title") == [
        "This value is too long. It should have 30 characters or less."
    ]


def test_update_has_no_title_length_rule(user):
    assert validate(_draft(user, title="Brie"), Context.UPDATE) == []
    assert validate(_draft(user, title="x" * 200), Context.UPDATE) == []


@pytest.mark.parametrize("context", [Context.CREATE, Context.UPDATE])
def test_title_must_not_be_blank(user, context):
    assert BLANK_MESSAGE in _messages(validate(_draft(user, title=""), context), "title")
    assert BLANK_MESSAGE in _messages(validate(_draft(user, title=None), context), "title")


@pytest.mark.parametrize("context", [Context.CREATE, Context.UPDATE])
def test_missing_price_is_blank(user, context):
    assert _messages(validate(_draft(user, price=None), context), "price") == [BLANK_MESSAGE]


def test_zero_price_is_not_blank(user):
    assert validate(_draft(user, price=0), Context.CREATE) == []


def test_malformed_types_are_reported_not_raised(user):
    violations = validate(_draft(user, title=12345, price="cheap", description=["x"]), Context.CREATE)
    assert _messages(violations, "title") == ["This value should be of type string."]
    assert _messages(violations, "price") == ["This value should be of type int."]
    assert _messages(violations, "description") == ["This value should be of type string."]


def test_boolean_price_is_not_an_int(user):
    assert _messages(validate(_draft(user, price=True), Context.CREATE), "price") == [
        "This value should be of type int."
    ]


def test_unresolved_owner_reference(user):
    violations = validate(_draft(user, owner=UnresolvedReference("/api/v1/users/99")), Context.CREATE)
    assert violations == [
        Violation("owner", 'No user matches the owner reference "/api/v1/users/99".')
    ]


def test_owner_must_be_persisted():
    unsaved = User(email="new@cheesemarket.com", full_name="New Seller")
    violations = validate(_draft(unsaved), Context.UPDATE)
    assert violations == [Violation("owner", "Owner must reference an existing user.")]


def test_owner_is_required(user):
    assert _messages(validate(_draft(user, owner=None), Context.CREATE), "owner") == [BLANK_MESSAGE]


def test_publication_context_has_no_rules():
    assert validate(ListingDraft(), Context.PUBLICATION) == []


def test_description_is_unconstrained(user):
    assert validate(_draft(user, description=None), Context.CREATE) == []
    assert validate(_draft(user, description=""), Context.CREATE) == []


@pytest.mark.parametrize("context", [Context.CREATE, Context.UPDATE])
@pytest.mark.parametrize("price", [INTEGER_MAX + 1, 2**64, INTEGER_MIN - 1])
def test_price_outside_integer_column_is_a_violation(user, context, price):
    assert _messages(validate(_draft(user, price=price), context), "price") == [
        f"This value should be between {INTEGER_MIN} and {INTEGER_MAX}."
    ]


@pytest.mark.parametrize("price", [INTEGER_MAX, INTEGER_MIN, 0])
def test_price_at_integer_bounds_passes(user, price):
    assert validate(_draft(user, price=price), Context.CREATE) == []


def test_range_leaves_non_integers_to_the_type_rule():
    rule = Range(min=0, max=10)
    assert rule.check("11") is None
    assert rule.check(True) is None
    assert rule.check(None) is None
    assert rule.check(11) == "This value should be between 0 and 10."


def test_rule_without_check_cannot_be_instantiated():
    class Unfinished(Rule):
        pass

    with pytest.raises(TypeError):
        Unfinished()
