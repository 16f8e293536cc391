import json

from llm_bridge.core.context import ContextStore
from llm_bridge.providers.base.models import ContextEntry, Message


def test_add_preserves_insertion_order_and_duplicates():
    store = ContextStore()
    store.add("A", 1)
    store.add("B", {"x": 2})
    store.add("A", 3)

    assert store.get() == [ContextEntry("A", 1), ContextEntry("B", {"x": 2}), ContextEntry("A", 3)]
    assert store.get("A") == [ContextEntry("A", 1), ContextEntry("A", 3)]
    assert store.get("missing") == []


def test_serialize_groups_same_label_in_arrival_order():
    store = ContextStore()
    store.add("Greeting", {"msg": "Hello"})
    store.add("Footer", "Goodbye")
    store.add("Greeting", "again")

    assert store.serialize() == '{"Greeting":[{"msg":"Hello"},"again"],"Footer":["Goodbye"]}'


def test_serialize_keeps_non_ascii():
    store = ContextStore()
    store.add("Ingrédients", "blé")
    assert json.loads(store.serialize()) == {"Ingrédients": ["blé"]}
    assert "blé" in store.serialize()


def test_clear_by_label_and_all():
    store = ContextStore()
    store.add("A", 1)
    store.add("B", 2)
    store.clear("A")
    assert [e.label for e in store.get()] == ["B"]

    store.add("C", 3)
    store.clear()
    assert store.get() == []
    assert len(store) == 0


def test_inject_prepends_single_user_message():
    store = ContextStore()
    turns = [Message("assistant", "Hello"), Message("user", "How are you?")]
    assert store.inject(turns) == turns

    store.add("SUper Context", "Duper Context")
    out = store.inject(turns)
    assert len(out) == 3
    assert out[0] == Message("user", '{"SUper Context":["Duper Context"]}')
    assert out[1:] == turns


def test_many_entries_keep_order():
    store = ContextStore()
    labels = [f"label-{i}" for i in range(25)]
    for i, label in enumerate(labels):
        store.add(label, i)
    assert list(json.loads(store.serialize()).keys()) == labels


def test_copy_is_independent():
    store = ContextStore()
    store.add("A", 1)
    other = store.copy()
    other.add("B", 2)
    other.clear("A")

    assert store.get() == [ContextEntry("A", 1)]
    assert other.get() == [ContextEntry("B", 2)]
