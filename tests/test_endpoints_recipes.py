from fastapi.testclient import TestClient
from unittest.mock import patch, AsyncMock
from sqlalchemy.exc import SQLAlchemyError

from app.main import app
from app.core import dependencies
from app.modules.recipes import api as recipes_api
from app.modules.search_quota.service import SearchLimitExceeded
from app.schemas.recipe_schema import Recipe, RecipeSearchResponse
from app.schemas.search_quota_schema import SearchInfo


def search_info(remaining=2, count=1, max_searches=3, plan="Free"):
    return SearchInfo(
        max_searches=max_searches,
        daily_search_count=count,
        remaining_searches=remaining,
        plan_name=plan,
    )


def test_search_recipes_success(authenticated_client):
    response_body = RecipeSearchResponse(
        data=[Recipe(id=1, name="Tomato Soup", ingredients=["tomato", "onion"])],
        remaining_searches=2,
        max_searches=3,
    )
    with patch.object(dependencies.search_quota_service, "check_and_consume", new_callable=AsyncMock) as mock_gate, \
         patch.object(recipes_api.recipe_service, "search_recipes", new_callable=AsyncMock) as mock_search, \
         patch("app.modules.recipes.api.log_activity", new_callable=AsyncMock):
        mock_gate.return_value = search_info()
        mock_search.return_value = response_body

        response = authenticated_client.post(
            "/api/recipes/search",
            json={"ingredients": ["tomato", " onion "]},
            headers={"Authorization": "Bearer mock_token"},
        )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["remainingSearches"] == 2
    assert body["maxSearches"] == 3
    assert body["data"][0]["name"] == "Tomato Soup"
    assert mock_search.await_args.kwargs["ingredients"] == ["tomato", "onion"]
    assert mock_search.await_args.kwargs["search_info"].daily_search_count == 1


def test_search_recipes_limit_exceeded(authenticated_client):
    with patch.object(dependencies.search_quota_service, "check_and_consume", new_callable=AsyncMock) as mock_gate, \
         patch.object(recipes_api.recipe_service, "search_recipes", new_callable=AsyncMock) as mock_search:
        mock_gate.side_effect = SearchLimitExceeded(limit=3, plan="Free")

        response = authenticated_client.post("/api/recipes/search", json={"ingredients": ["egg"]})

    assert response.status_code == 429
    assert response.json() == {
        "success": False,
        "message": "You have reached your daily limit of 3 searches. Upgrade your plan for more searches!",
        "error": "daily_limit_exceeded",
        "limit": 3,
        "remaining": 0,
        "plan": "Free",
        "upgradeRequired": True,
    }
    mock_search.assert_not_awaited()


def test_search_recipes_limit_exceeded_on_pro(authenticated_client):
    with patch.object(dependencies.search_quota_service, "check_and_consume", new_callable=AsyncMock) as mock_gate:
        mock_gate.side_effect = SearchLimitExceeded(limit=50, plan="Pro")

        response = authenticated_client.post("/api/recipes/search", json={"ingredients": ["egg"]})

    assert response.status_code == 429
    assert response.json()["upgradeRequired"] is False
    assert response.json()["limit"] == 50


def test_search_recipes_storage_error(authenticated_client, mock_db_session):
    with patch.object(dependencies.search_quota_service, "check_and_consume", new_callable=AsyncMock) as mock_gate, \
         patch.object(recipes_api.recipe_service, "search_recipes", new_callable=AsyncMock) as mock_search:
        mock_gate.side_effect = SQLAlchemyError("connection lost")

        response = authenticated_client.post("/api/recipes/search", json={"ingredients": ["egg"]})

    assert response.status_code == 500
    assert response.json() == {"message": "Error checking search limits", "code": 500}
    mock_db_session.rollback.assert_awaited_once()
    mock_search.assert_not_awaited()


def test_search_recipes_requires_ingredients(authenticated_client):
    with patch.object(dependencies.search_quota_service, "check_and_consume", new_callable=AsyncMock) as mock_gate:
        mock_gate.return_value = search_info()
        response = authenticated_client.post("/api/recipes/search", json={"ingredients": ["  "]})

    assert response.status_code == 422
    assert response.json()["message"] == "Validation failed"


def test_search_recipes_without_token():
    with TestClient(app) as client:
        response = client.post("/api/recipes/search", json={"ingredients": ["egg"]})

    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_search_recipes_with_invalid_token():
    with TestClient(app) as client:
        response = client.post(
            "/api/recipes/search",
            json={"ingredients": ["egg"]},
            headers={"Authorization": "Bearer not-a-jwt"},
        )

    assert response.status_code == 401
    assert response.json()["message"] == "Could not validate credentials"


def test_admin_search_requires_admin(authenticated_client):
    with patch.object(dependencies.search_quota_service, "check_and_consume", new_callable=AsyncMock) as mock_gate:
        response = authenticated_client.post("/api/admin/recipes/search", json={"ingredients": ["egg"]})

    assert response.status_code == 403
    mock_gate.assert_not_awaited()


def test_admin_search_goes_through_gate(admin_client):
    with patch.object(dependencies.search_quota_service, "check_and_consume", new_callable=AsyncMock) as mock_gate:
        mock_gate.side_effect = SearchLimitExceeded(limit=10, plan="Basic")

        response = admin_client.post("/api/admin/recipes/search", json={"ingredients": ["egg"]})

    assert response.status_code == 429
    assert response.json()["plan"] == "Basic"


def test_featured_recipes_is_public():
    with TestClient(app) as client, \
         patch.object(recipes_api.recipe_service, "get_featured_recipes", new_callable=AsyncMock) as mock_featured:
        mock_featured.return_value = [Recipe(id=3, name="Pancakes", ingredients=["flour"], is_featured=True)]
        response = client.get("/api/recipes/featured")

    assert response.status_code == 200
    assert response.json()[0]["name"] == "Pancakes"
