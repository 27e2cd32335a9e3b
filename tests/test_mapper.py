"""
Tests for writing translations back into a cloned graph.
"""

from datetime import datetime

import pytest
from pydantic import BaseModel

from lingograph.core.mapper import (
    Cursor,
    MappingError,
    ResultMapper,
    UnresolvedAddress,
    apply,
    coerce_text,
    descend,
)
from lingograph.core.paths import Segment
from tests.models import (
    Badge,
    Envelope,
    Holder,
    Item,
    Memo,
    Note,
    Numbers,
    Order,
    Stamp,
    Status,
    make_employee,
)


class Lookup:
    """Indexable by its own keys, without being a Mapping."""

    def __init__(self, data):
        self._data = data

    def __getitem__(self, key):
        return self._data[key]


class Ranking(BaseModel):
    by_rank: dict[int, str] = {}


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def employee():
    return make_employee(
        orders=[
            Order(number=n, name=f"Order {n}", items=[Item(name=f"Item {n}")])
            for n in range(4)
        ],
        notes={"gift.wrap": "Blue paper"},
    )


# =============================================================================
# Coercion
# =============================================================================


class TestCoerceText:
    def test_text_targets_keep_text(self):
        assert coerce_text("hello", str) == "hello"
        assert coerce_text("hello", None) == "hello"
        assert coerce_text("hello", str | None) == "hello"

    def test_numbers(self):
        assert coerce_text("42", int) == 42
        assert coerce_text(" 2.5 ", float) == 2.5

    def test_enum_and_bool(self):
        assert coerce_text("retired", Status) is Status.RETIRED
        assert coerce_text("yes", bool) is True
        assert coerce_text("False", bool) is False

    def test_datetime(self):
        assert coerce_text("2024-03-01T10:00:00", datetime) == datetime(2024, 3, 1, 10)

    @pytest.mark.parametrize(
        "text,target",
        [("abc", int), ("maybe", bool), ("unknown", Status), ("later", datetime)],
    )
    def test_failures(self, text, target):
        with pytest.raises(MappingError):
            coerce_text(text, target)


# =============================================================================
# Descent
# =============================================================================


class TestDescend:
    def test_member_then_index(self, employee):
        cursor = descend(Cursor(employee), Segment("orders", ("2",)))
        assert cursor.value is employee.orders[2]
        assert cursor.declared_type is Order

    def test_is_pure(self, employee):
        before = employee.model_dump()
        descend(Cursor(employee), Segment("orders", ("1",)))
        descend(Cursor(employee), Segment("notes", ("gift.wrap",)))
        assert employee.model_dump() == before

    def test_missing_member(self, employee):
        with pytest.raises(UnresolvedAddress):
            descend(Cursor(employee), Segment("nickname"))

    def test_index_by_string(self):
        lookup = Lookup({"alpha": "A"})
        assert descend(Cursor(lookup), Segment("", ("alpha",))).value == "A"

    def test_index_by_datetime(self):
        lookup = Lookup({datetime(2024, 1, 1): "New year"})
        cursor = descend(Cursor(lookup), Segment("", ("2024-01-01T00:00:00",)))
        assert cursor.value == "New year"

    def test_unresolvable_index(self):
        with pytest.raises(UnresolvedAddress):
            descend(Cursor(Lookup({})), Segment("", ("anything",)))

    def test_negative_index_is_not_a_position(self):
        with pytest.raises(UnresolvedAddress):
            descend(Cursor(["a", "b"]), Segment("", ("-1",)))


# =============================================================================
# Applying translations
# =============================================================================


class TestApply:
    def test_nested_sequence_member(self, employee):
        result = apply(employee, "Employee", {"Employee.orders[2].name": "Commande 2"})

        assert result is employee
        assert [order.name for order in employee.orders] == ["Order 0", "Order 1", "Commande 2", "Order 3"]

    def test_several_pairs(self, employee):
        apply(
            employee,
            "Employee",
            {
                "Employee.name": "essai",
                "Employee.description": "Texte à traduire",
                "Employee.orders[0].items[0].name": "Article 0",
            },
        )
        assert employee.name == "essai"
        assert employee.description == "Texte à traduire"
        assert employee.orders[0].items[0].name == "Article 0"

    def test_dotted_mapping_key(self, employee):
        apply(employee, "Employee", {"Employee.notes[gift.wrap]": "Papier bleu"})
        assert employee.notes == {"gift.wrap": "Papier bleu"}

    def test_accepts_pairs(self, employee):
        apply(employee, "Employee", [("Employee.name", "one"), ("Employee.name", "two")])
        assert employee.name == "two"

    def test_text_root_is_replaced(self):
        assert apply("hello", "Greeting", {"Greeting": "bonjour"}) == "bonjour"

    def test_list_root(self):
        items = ["a", "b", "c"]
        apply(items, "Items", {"Items[1]": "B"})
        assert items == ["a", "B", "c"]

    def test_dict_root(self):
        payload = {"title": "Hello", "nested": {"a": "b"}}
        apply(payload, "Payload", {"Payload[nested][a]": "B"})
        assert payload == {"title": "Hello", "nested": {"a": "B"}}

    def test_unresolved_pairs_are_skipped(self, employee):
        apply(
            employee,
            "Employee",
            {
                "Employee.nickname": "x",
                "Employee.orders[9].name": "x",
                "Employee.notes[missing]": "x",
                "Customer.name": "x",
                "Employee.orders[1.name": "x",
                "Employee.name": "applied",
            },
        )
        assert employee.name == "applied"
        assert employee.notes == {"gift.wrap": "Blue paper"}
        assert not hasattr(employee, "nickname")

    def test_coercion_failure_raises(self):
        numbers = Numbers(id=1, ratio=0.5)
        with pytest.raises(MappingError):
            apply(numbers, "Numbers", {"Numbers.id": "abc"})

    def test_coerces_to_declared_type(self):
        numbers = Numbers(id=1, ratio=0.5, scores={"a": 1})
        apply(numbers, "Numbers", {"Numbers.id": "42", "Numbers.scores[a]": "7"})
        assert numbers.id == 42
        assert numbers.scores == {"a": 7}

    def test_enum_member(self, employee):
        apply(employee, "Employee", {"Employee.status": "retired"})
        assert employee.status is Status.RETIRED


class TestReadOnlyTargets:
    def test_property_without_setter(self):
        memo = Memo("Quarterly numbers", "All good")
        apply(memo, "Memo", {"Memo.summary": "Chiffres", "Memo.subject": "Chiffres trimestriels"})

        assert memo.subject == "Chiffres trimestriels"
        assert memo.summary == "Chiffres t"

    def test_frozen_pydantic_model(self):
        holder = Holder(badge=Badge(label="Guest"))
        apply(holder, "Holder", {"Holder.badge.label": "Invité"})
        assert holder.badge.label == "Guest"

    def test_frozen_dataclass(self):
        envelope = Envelope(stamp=Stamp("Priority"), note=Note("Title", "Body"))
        apply(envelope, "Envelope", {"Envelope.stamp.text": "Prioritaire", "Envelope.note.title": "Titre"})

        assert envelope.stamp.text == "Priority"
        assert envelope.note.title == "Titre"

    def test_tuple_elements(self):
        holder = Holder(badge=Badge(label="Guest"))
        apply(holder, "Holder", {"Holder.pair[0]": "gauche"})
        assert holder.pair == ("left", "right")


class TestKeys:
    def test_declared_int_keys(self):
        ranking = Ranking(by_rank={1: "First", 2: "Second"})
        apply(ranking, "Ranking", {"Ranking.by_rank[2]": "Deuxième"})
        assert ranking.by_rank == {1: "First", 2: "Deuxième"}

    def test_undeclared_int_keys(self):
        payload = {1: "one", 2: "two"}
        apply(payload, "Payload", {"Payload[1]": "uno"})
        assert payload == {1: "uno", 2: "two"}

    def test_enum_keys(self):
        payload = {Status.ACTIVE: "Working", Status.RETIRED: "Resting"}
        apply(payload, "Payload", {"Payload[retired]": "Au repos"})
        assert payload[Status.RETIRED] == "Au repos"
        assert payload[Status.ACTIVE] == "Working"


class TestPlainObjects:
    def test_unannotated_attribute(self):
        memo = Memo("Subject", "Body")
        apply(memo, "Memo", {"Memo.body": "Corps"})
        assert memo.body == "Corps"

    def test_unannotated_attribute_keeps_runtime_type(self):
        memo = Memo("Subject", "Body", priority=1)
        apply(memo, "Memo", {"Memo.priority": "3"})
        assert memo.priority == 3


class TestResultMapper:
    def test_root_type_drives_root_coercion(self):
        mapper = ResultMapper("Count", root_type=int)
        assert mapper.apply("1", {"Count": "5"}) == 5

    def test_apply_one_other_root(self, employee):
        with pytest.raises(UnresolvedAddress):
            ResultMapper("Employee").apply_one(employee, "Manager.name", "x")
