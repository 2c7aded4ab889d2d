"""Own recipe API tests."""

import json
from pathlib import Path

from cookbook.api.dependencies import get_recipe_service
from cookbook.config import get_settings
from cookbook.exceptions import StoreError
from cookbook.main import app
from cookbook.models import Recipe, RecipeFavorite


def recipe_form(**overrides):
    form = {
        "title": "Grandma Soup",
        "category": "Soup",
        "instructions": "Boil everything.",
        "description": "Warm and simple",
        "time": "45",
        "ingredients": json.dumps([{"id": "carrot", "measure": "2"}]),
        "tags": json.dumps(["winter"]),
    }
    form.update(overrides)
    return form


def add_recipe(client, headers, png_image, **overrides):
    return client.post(
        "/ownRecipes/add",
        headers=headers,
        data=recipe_form(**overrides),
        files={"thumb": ("soup.png", png_image(), "image/png")},
    )


def test_add_own_recipe(client, auth_headers, png_image, db):
    response = add_recipe(client, auth_headers, png_image)
    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "success"
    assert data["code"] == 201
    assert data["message"] == "Created"

    recipe = data["recipe"]
    assert recipe["title"] == "Grandma Soup"
    assert recipe["owner"] == auth_headers.user_id
    assert recipe["ingredients"] == [{"id": "carrot", "measure": "2"}]
    assert recipe["tags"] == ["winter"]
    assert recipe["favorites"] == []

    file_name = recipe["thumb"].rsplit("/", 1)[-1]
    assert file_name.startswith(f"{auth_headers.user_id}_Grandma_Soup_")
    assert file_name.endswith(".png")
    assert (Path(get_settings().static_dir) / "thumbs" / file_name).exists()

    assert db.query(Recipe).filter(Recipe.owner_id == auth_headers.user_id).count() == 1


def test_add_own_recipe_store_failure_removes_thumb(client, auth_headers, png_image):
    class FailingRecipes:
        def create(self, fields, owner_id):
            raise StoreError()

    app.dependency_overrides[get_recipe_service] = FailingRecipes
    response = add_recipe(client, auth_headers, png_image, title="Doomed Stew")
    assert response.status_code == 500

    thumbs = Path(get_settings().static_dir) / "thumbs"
    assert list(thumbs.glob(f"{auth_headers.user_id}_Doomed_Stew_*")) == []


def test_add_own_recipe_missing_thumb(client, auth_headers):
    response = client.post("/ownRecipes/add", headers=auth_headers, data=recipe_form())
    assert response.status_code == 400
    assert response.json()["message"] == "File is required"


def test_add_own_recipe_missing_field(client, auth_headers, png_image):
    form = recipe_form()
    del form["title"]
    response = client.post(
        "/ownRecipes/add",
        headers=auth_headers,
        data=form,
        files={"thumb": ("soup.png", png_image(), "image/png")},
    )
    assert response.status_code == 400


def test_add_own_recipe_bad_ingredients(client, auth_headers, png_image, db):
    for ingredients in ["not json", "[]", json.dumps([{"measure": "1"}])]:
        response = add_recipe(client, auth_headers, png_image, ingredients=ingredients)
        assert response.status_code == 400, ingredients
    assert db.query(Recipe).count() == 0


def test_add_own_recipe_requires_auth(client, png_image):
    response = client.post(
        "/ownRecipes/add",
        data=recipe_form(),
        files={"thumb": ("soup.png", png_image(), "image/png")},
    )
    assert response.status_code == 401


def test_list_own_recipes_paginated(client, auth_headers, second_user_headers, make_recipe):
    for i in range(5):
        make_recipe(f"Mine {i}", owner_id=auth_headers.user_id)
    make_recipe("Theirs", owner_id=second_user_headers.user_id)
    make_recipe("Catalog")

    response = client.get(
        "/ownRecipes", params={"page": 2, "limit": 2}, headers=auth_headers
    )
    assert response.status_code == 200
    page = response.json()["recipes"]
    assert page["page"] == 2
    assert page["perPage"] == 2
    assert page["totalPages"] == 3
    assert page["totalRecipes"] == 5
    assert [r["title"] for r in page["data"]] == ["Mine 2", "Mine 3"]


def test_list_own_recipes_default_pagination(client, auth_headers, make_recipe):
    for i in range(5):
        make_recipe(f"Mine {i}", owner_id=auth_headers.user_id)

    response = client.get(
        "/ownRecipes", params={"page": "abc", "limit": "-3"}, headers=auth_headers
    )
    page = response.json()["recipes"]
    assert page["page"] == 1
    assert page["perPage"] == 4
    assert len(page["data"]) == 4


def test_list_own_recipes_past_last_page(client, auth_headers, make_recipe):
    make_recipe("Mine", owner_id=auth_headers.user_id)
    response = client.get("/ownRecipes", params={"page": 5}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["recipes"]["data"] == []


def test_list_own_recipes_huge_page(client, auth_headers, make_recipe):
    make_recipe("Mine", owner_id=auth_headers.user_id)
    response = client.get(
        "/ownRecipes", params={"page": "99999999999999999999"}, headers=auth_headers
    )
    assert response.status_code == 200
    page = response.json()["recipes"]
    assert page["data"] == []
    assert page["totalRecipes"] == 1


def test_list_own_recipes_none(client, auth_headers, make_recipe):
    make_recipe("Catalog")
    response = client.get("/ownRecipes", headers=auth_headers)
    assert response.status_code == 404


def test_delete_own_recipe(client, auth_headers, make_recipe, db):
    recipe = make_recipe("Mine", owner_id=auth_headers.user_id)
    recipe_id = recipe.id
    db.add(RecipeFavorite(recipe_id=recipe_id, user_id=auth_headers.user_id))
    db.commit()

    response = client.delete(f"/ownRecipes/{recipe_id}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["message"] == "Recipe deleted"

    assert client.get(f"/recipes/{recipe_id}", headers=auth_headers).status_code == 404
    assert db.query(RecipeFavorite).filter(RecipeFavorite.recipe_id == recipe_id).count() == 0


def test_delete_other_users_recipe_forbidden(
    client, auth_headers, second_user_headers, make_recipe, db
):
    recipe = make_recipe("Theirs", owner_id=second_user_headers.user_id)
    response = client.delete(f"/ownRecipes/{recipe.id}", headers=auth_headers)
    assert response.status_code == 403
    assert db.query(Recipe).filter(Recipe.id == recipe.id).count() == 1


def test_delete_catalog_recipe_forbidden(client, auth_headers, make_recipe):
    recipe = make_recipe("Catalog")
    response = client.delete(f"/ownRecipes/{recipe.id}", headers=auth_headers)
    assert response.status_code == 403


def test_delete_missing_recipe(client, auth_headers):
    response = client.delete("/ownRecipes/424242", headers=auth_headers)
    assert response.status_code == 404
