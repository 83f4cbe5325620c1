"""
Smoke tests for the SQLRepository against a temporary SQLite database.
"""
from __future__ import annotations

import pytest

from catapi.domain.geo import rectangle_bounds
from catapi.repositories.sql_repository import DuplicateEmailError


def test_user_crud(repo, make_user):
    alice = make_user("alice")

    assert len(alice.id) == 24
    assert alice.role == "user"
    assert repo.get_user(alice.id).email == "alice@example.com"
    assert repo.get_user_by_email("alice@example.com").id == alice.id

    updated = repo.update_user(alice.id, {"user_name": "Alice"})
    assert updated.user_name == "Alice"

    removed = repo.delete_user(alice.id)
    assert removed.id == alice.id
    assert repo.get_user(alice.id) is None
    assert repo.delete_user(alice.id) is None


def test_duplicate_email_is_rejected(repo, make_user):
    make_user("bob")

    with pytest.raises(DuplicateEmailError):
        repo.create_user(user_name="bob2", email="bob@example.com", password_hash="hash")


def test_unknown_role_is_rejected(repo):
    with pytest.raises(ValueError, match="Unknown role"):
        repo.create_user(user_name="eve", email="eve@example.com", password_hash="hash", role="root")

    assert repo.get_user_by_email("eve@example.com") is None


def test_update_to_taken_email_is_rejected(repo, make_user):
    make_user("bob")
    carol = make_user("carol")

    with pytest.raises(DuplicateEmailError):
        repo.update_user(carol.id, {"email": "bob@example.com"})
    assert repo.get_user(carol.id).email == "carol@example.com"


def test_cats_are_loaded_with_owner(repo, make_user, make_cat):
    alice = make_user("alice")
    bob = make_user("bob")
    make_cat(alice, name="Tom")
    make_cat(bob, name="Garfield")

    cats = repo.list_cats()
    assert [c.cat_name for c in cats] == ["Tom", "Garfield"]
    assert cats[0].owner.user_name == "alice"

    mine = repo.get_cats_by_owner(alice.id)
    assert [c.cat_name for c in mine] == ["Tom"]


def test_update_and_delete_cat(repo, make_user, make_cat):
    alice = make_user("alice")
    bob = make_user("bob")
    cat = make_cat(alice)

    updated = repo.update_cat(cat.id, {"weight": 5.5, "owner_id": bob.id})
    assert updated.weight == 5.5
    assert updated.owner.id == bob.id

    deleted = repo.delete_cat(cat.id)
    assert deleted.id == cat.id
    assert repo.get_cat(cat.id) is None
    assert repo.update_cat(cat.id, {"weight": 1}) is None
    assert repo.delete_cat(cat.id) is None


def test_cats_within_bounding_box(repo, make_user, make_cat):
    alice = make_user("alice")
    make_cat(alice, name="inside", lng=24.9, lat=60.2)
    make_cat(alice, name="edge", lng=25.0, lat=60.0)
    make_cat(alice, name="outside", lng=27.0, lat=62.0)

    bounds = rectangle_bounds({"lat": 60.5, "lng": 25.0}, {"lat": 60.0, "lng": 24.5})
    found = {c.cat_name for c in repo.get_cats_within(bounds)}

    assert found == {"inside", "edge"}


def test_deleting_user_removes_their_cats(repo, make_user, make_cat):
    alice = make_user("alice")
    bob = make_user("bob")
    make_cat(alice, name="Tom")
    make_cat(bob, name="Garfield")

    repo.delete_user(alice.id)

    assert [c.cat_name for c in repo.list_cats()] == ["Garfield"]
