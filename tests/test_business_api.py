"""API tests for business settings"""


def test_get_settings(client, auth_headers):
    response = client.get("/business/settings", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {
        "name": "Acme Coffee",
        "email": "owner@acmecoffee.com",
        "website": None,
        "description": None,
        "phone": None,
        "address": None,
    }


def test_settings_require_api_key(client):
    assert client.get("/business/settings").status_code == 401


def test_update_settings(client, auth_headers):
    response = client.patch(
        "/business/settings",
        json={"website": "https://acme.example", "phone": "555 010 2020", "email": "Hello@Acme.example"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["website"] == "https://acme.example"
    assert body["phone"] == "5550102020"
    assert body["email"] == "hello@acme.example"
    assert body["name"] == "Acme Coffee"
    assert client.get("/business/settings", headers=auth_headers).json() == body


def test_update_settings_only_touches_own_business(client, auth_headers, other_business):
    client.patch("/business/settings", json={"name": "Acme Roasters"}, headers=auth_headers)

    other = client.get("/business/settings", headers={"X-API-Key": other_business.api_key}).json()
    assert other["name"] == "Other Shop"


def test_update_settings_rejects_null_name(client, auth_headers):
    response = client.patch("/business/settings", json={"name": None}, headers=auth_headers)

    assert response.status_code == 422
