def test_get_me(client, api, auth_headers, signup):
    body = signup()

    resp = client.get(f"{api}/users/me", headers=auth_headers(body["access_token"]))
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["email"] == "hana@example.com"
    assert data["created_at"].endswith("+00:00")
    assert data["updated_at"] is None


def test_update_profile(client, api, auth_headers, signup):
    body = signup()
    headers = auth_headers(body["access_token"])

    resp = client.patch(f"{api}/users/me", json={"name": "Hana S.", "email": "Hana.S@example.com"}, headers=headers)
    assert resp.status_code == 200
    user = resp.get_json()["user"]
    assert user["name"] == "Hana S."
    assert user["email"] == "hana.s@example.com"
    assert user["updated_at"] is not None

    # o token continua válido depois de trocar o email
    assert client.get(f"{api}/users/me", headers=headers).get_json()["name"] == "Hana S."


def test_update_profile_email_taken(client, api, auth_headers, signup):
    signup(email="ken@example.com", name="Ken")
    body = signup()

    resp = client.patch(
        f"{api}/users/me", json={"email": "ken@example.com"}, headers=auth_headers(body["access_token"])
    )
    assert resp.status_code == 409


def test_users_me_requires_token(client, api):
    assert client.get(f"{api}/users/me").status_code == 401
