"""Shared HTTP helpers for route tests."""

PASSWORD = "Passw0rd!"


async def sign_up(client, name, email=None):
    """Create an account and return (user, auth headers)."""
    email = email or f"{name.lower()}@school.edu"
    res = await client.post(
        "/api/v1/auth/signup",
        json={"email": email, "password": PASSWORD, "name": name},
    )
    assert res.status_code == 201, res.text
    body = res.json()
    return body["user"], {"Authorization": f"Bearer {body['token']}"}
