from httpx import AsyncClient
from sqlmodel import select

from src.domain.entities import User, UserRole, UserStatus


async def signup(client: AsyncClient, payload: dict):
    response = await client.post("/auth/signup", json=payload)
    assert response.status_code == 201, response.text
    return response


async def login(client: AsyncClient, identifier: str, password: str):
    return await client.post("/auth/login", json={"email": identifier, "password": password})


async def get_user(db_session, email: str) -> User:
    result = await db_session.exec(select(User).where(User.email == email.lower()))
    return result.one()


async def set_role(db_session, email: str, role: UserRole) -> User:
    user = await get_user(db_session, email)
    user.role = role
    db_session.add(user)
    await db_session.commit()
    return user


async def set_status(db_session, email: str, status: UserStatus) -> User:
    user = await get_user(db_session, email)
    user.status = status
    db_session.add(user)
    await db_session.commit()
    return user


async def signup_as(client: AsyncClient, db_session, payload: dict, role: UserRole):
    """Sign up, promote in the database, then log in again so the token carries the role."""
    await signup(client, payload)
    await set_role(db_session, payload["email"], role)
    response = await login(client, payload["email"], payload["password"])
    assert response.status_code == 200, response.text
    return response
