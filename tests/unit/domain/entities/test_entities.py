import pytest

from collectionstore.domain.entities import Collection, Item, Webhook

STAMP = "2026-10-19T04:30:00.000000Z"


def test_collection_defaults_to_empty_schema_without_items():
    collection = Collection(id="c1", name="books", created_at=STAMP, updated_at=STAMP)

    assert collection.schema == {}
    assert collection.items is None
    assert "items" not in collection.to_dict()


def test_collection_requires_id_and_name():
    with pytest.raises(ValueError, match="ID is required"):
        Collection(id="", name="books", created_at=STAMP, updated_at=STAMP)
    with pytest.raises(ValueError, match="name is required"):
        Collection(id="c1", name="", created_at=STAMP, updated_at=STAMP)


def test_collection_schema_must_be_dict():
    with pytest.raises(ValueError, match="Schema must be a dictionary"):
        Collection(id="c1", name="books", schema=["title"], created_at=STAMP, updated_at=STAMP)


def test_collection_to_dict_includes_loaded_items():
    item = Item(id="i1", collection_id="c1", data={"title": "Dune"}, created_at=STAMP, updated_at=STAMP)
    collection = Collection(
        id="c1",
        name="books",
        schema={"title": "string"},
        created_at=STAMP,
        updated_at=STAMP,
        items=[item],
    )

    payload = collection.to_dict()

    assert payload["schema"] == {"title": "string"}
    assert payload["items"] == [
        {
            "id": "i1",
            "collection_id": "c1",
            "data": {"title": "Dune"},
            "created_at": STAMP,
            "updated_at": STAMP,
        }
    ]


def test_webhook_built_from_stored_row_with_empty_url():
    webhook = Webhook(id="w1", collection_id="c1", url="", created_at=STAMP, updated_at=STAMP)

    assert webhook.url == ""
    assert webhook.events == []


def test_webhook_to_dict():
    webhook = Webhook(
        id="w1",
        collection_id="c1",
        url="https://example.com/hook",
        events=["create", "delete"],
        created_at=STAMP,
        updated_at=STAMP,
    )

    assert webhook.to_dict()["events"] == ["create", "delete"]
