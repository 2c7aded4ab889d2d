"""Service tests against the database session."""

import pytest
from sqlalchemy.exc import OperationalError

from cookbook.exceptions import (
    STORE_ERROR_MESSAGE,
    AuthenticationFailed,
    Conflict,
    NotFound,
    StoreError,
    store_errors,
)
from cookbook.models import RecipeFavorite, ShoppingList, User
from cookbook.services.auth import TokenService
from cookbook.services.favorites import FavoritesService
from cookbook.services.pagination import Pagination
from cookbook.services.shopping_list import ShoppingListService
from cookbook.services.users import UserService


class FailingTokenService(TokenService):
    """Token service whose issue step hits a store failure."""

    def issue(self, user_id, now=None):
        raise OperationalError("INSERT", {}, Exception("connection lost"))


@pytest.fixture
def users(db):
    return UserService(db, TokenService("test-secret"))


def test_register_creates_user_and_shopping_list(users, db):
    user, token = users.register("alice", "alice@example.com", "Passw0rd", newsletter=True)
    assert user.newsletter is True
    assert user.token == token
    assert db.query(ShoppingList).filter(ShoppingList.owner_id == user.id).count() == 1


def test_register_failure_leaves_nothing_behind(db):
    users = UserService(db, FailingTokenService("test-secret"))
    with pytest.raises(StoreError) as exc_info:
        users.register("alice", "alice@example.com", "Passw0rd")

    assert exc_info.value.message == STORE_ERROR_MESSAGE
    assert db.query(User).count() == 0
    assert db.query(ShoppingList).count() == 0


def test_register_duplicate_email(users):
    users.register("alice", "alice@example.com", "Passw0rd")
    with pytest.raises(Conflict):
        users.register("alice2", "ALICE@example.com", "Passw0rd")


def test_resolve_session_after_logout(users):
    user, token = users.register("alice", "alice@example.com", "Passw0rd")
    assert users.resolve_session(token).id == user.id

    users.logout(user)
    with pytest.raises(AuthenticationFailed):
        users.resolve_session(token)


def test_resolve_session_for_deleted_user(users, db):
    user, token = users.register("alice", "alice@example.com", "Passw0rd")
    db.query(ShoppingList).delete()
    db.query(User).delete()
    db.commit()

    with pytest.raises(AuthenticationFailed) as exc_info:
        users.resolve_session(token)
    assert exc_info.value.message == "User not found"


def test_store_errors_wraps_and_rolls_back(db):
    db.add(User(name="ghost", email="ghost@example.com", password_hash="x", avatar="a"))
    db.flush()

    with pytest.raises(StoreError):
        with store_errors(db):
            raise OperationalError("SELECT 1", {}, Exception("boom"))

    assert db.query(User).count() == 0


def test_shopping_list_positions(users, db):
    user, _ = users.register("alice", "alice@example.com", "Passw0rd")
    service = ShoppingListService(db)
    for ingredient_id in ["a", "b", "c"]:
        service.add(user.id, ingredient_id, ingredient_id.upper(), "thumb", "1")

    service.remove_at(user.id, 0)
    entries = service.add(user.id, "d", "D", "thumb", "1")
    assert [e.ingredient_id for e in entries] == ["b", "c", "d"]
    assert [e.position for e in entries] == [1, 2, 3]

    with pytest.raises(NotFound):
        service.remove_at(user.id, 3)


def test_favorites_listing_counts_all_pages(users, db, make_recipe):
    user, _ = users.register("alice", "alice@example.com", "Passw0rd")
    service = FavoritesService(db)
    recipes = [make_recipe(f"R{i}") for i in range(6)]
    for recipe in recipes:
        service.add(recipe.id, user.id)
    service.add(recipes[0].id, user.id)

    assert db.query(RecipeFavorite).count() == 6

    result = service.list_for_user(user.id, Pagination(page=2, limit=4))
    assert result.total_count == 6
    assert result.total_pages == 2
    assert [r.title for r in result.items] == ["R4", "R5"]
