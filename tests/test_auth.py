"""Tests for login, cookies and user management."""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from hris.core.security import create_access_token, create_refresh_token, get_password_hash
from hris.models.user import User


async def _user(db_session: AsyncSession, role: str = "HR Manager") -> User:
    user = User(
        email="cookie@test.com",
        hashed_password=get_password_hash("password123"),
        role=role,
        is_active=True,
    )
    db_session.add(user)
    await db_session.commit()
    return user


@pytest.mark.asyncio
async def test_auth_cookies_httponly(async_client: AsyncClient, db_session: AsyncSession):
    """Login endpoint sets HttpOnly cookies."""
    await _user(db_session)
    response = await async_client.post(
        "/api/v1/auth/login", data={"username": "cookie@test.com", "password": "password123"}
    )
    assert response.status_code == 200
    assert response.json()["token_type"] == "bearer"
    assert "access_token" in response.cookies
    assert "refresh_token" in response.cookies

    set_cookie = response.headers.get("set-cookie")
    assert "HttpOnly" in set_cookie
    assert "SameSite=lax" in set_cookie


@pytest.mark.asyncio
async def test_wrong_password_rejected(async_client: AsyncClient, db_session: AsyncSession):
    await _user(db_session)
    response = await async_client.post(
        "/api/v1/auth/login", data={"username": "cookie@test.com", "password": "wrong"}
    )
    assert response.status_code == 401
    assert response.json() == {"detail": "Incorrect email or password", "success": False}


@pytest.mark.asyncio
async def test_refresh_issues_new_pair(async_client: AsyncClient, db_session: AsyncSession):
    user = await _user(db_session)
    response = await async_client.post(
        "/api/v1/auth/refresh", json={"refresh_token": create_refresh_token(user.id)}
    )
    assert response.status_code == 200
    assert response.json()["access_token"]

    # an access token is not accepted as a refresh token
    response = await async_client.post(
        "/api/v1/auth/refresh", json={"refresh_token": create_access_token(user.id)}
    )
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_page_login_sets_cookie_and_lands_on_sick_leaves(
    async_client: AsyncClient, db_session: AsyncSession
):
    await _user(db_session)
    response = await async_client.post(
        "/login", data={"email": "cookie@test.com", "password": "password123"}
    )
    assert response.status_code == 303
    assert response.headers["location"] == "/sick-leaves"
    assert "access_token" in response.cookies

    # already signed in: the login root forwards to the landing page
    root = await async_client.get("/")
    assert root.status_code == 303


@pytest.mark.asyncio
async def test_page_login_failure_rerenders_form(async_client: AsyncClient, db_session: AsyncSession):
    await _user(db_session)
    response = await async_client.post("/login", data={"email": "cookie@test.com", "password": "nope"})
    assert response.status_code == 401
    assert "Incorrect email or password" in response.text
    assert 'value="cookie@test.com"' in response.text


@pytest.mark.asyncio
async def test_login_root_renders_for_anonymous(async_client: AsyncClient):
    response = await async_client.get("/")
    assert response.status_code == 200
    assert "Sign in" in response.text


@pytest.mark.asyncio
async def test_logout_clears_cookies(async_client: AsyncClient):
    response = await async_client.post("/logout")
    assert response.status_code == 303
    assert response.headers["location"] == "/"
    assert 'access_token=""' in response.headers.get("set-cookie", "")


@pytest.mark.asyncio
async def test_create_user_requires_user_ability(async_client: AsyncClient, act_as_role):
    body = {"email": "new@test.com", "password": "password123", "role": "Employee"}
    response = await async_client.post("/api/v1/auth/users", json=body)
    assert response.status_code == 201
    assert response.json()["role"] == "Employee"

    act_as_role("Employee")
    response = await async_client.post(
        "/api/v1/auth/users", json={**body, "email": "other@test.com"}
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_create_user_rejects_unknown_role(async_client: AsyncClient):
    response = await async_client.post(
        "/api/v1/auth/users",
        json={"email": "x@test.com", "password": "password123", "role": "Wizard"},
    )
    assert response.status_code == 422
