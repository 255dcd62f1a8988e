"""Expense API tests."""

COFFEE = {"description": "Coffee", "amount": 4.50, "category": "Food", "date": "2024-01-01"}


def create_expense(client, headers, **overrides):
    response = client.post("/api/expenses", headers=headers, json={**COFFEE, **overrides})
    assert response.status_code == 201, response.text
    return response.json()


def test_create_and_list_round_trip(client, auth_headers):
    """Test that a created expense is listed back exactly."""
    created = create_expense(client, auth_headers)
    assert created["id"]
    assert created["createdAt"] is not None
    assert created["updatedAt"] is None

    response = client.get("/api/expenses", headers=auth_headers)
    assert response.status_code == 200
    expenses = response.json()
    assert len(expenses) == 1
    expense = expenses[0]
    assert expense["id"] == created["id"]
    assert expense["userId"] == auth_headers.user_id
    assert expense["description"] == "Coffee"
    assert expense["amount"] == 4.5
    assert expense["category"] == "Food"
    assert expense["date"] == "2024-01-01"
    assert expense["createdAt"] is not None


def test_create_ignores_user_id_in_body(client, auth_headers, other_headers):
    """Test that the owner is always the caller."""
    created = create_expense(client, auth_headers, userId=other_headers.user_id)
    assert created["userId"] == auth_headers.user_id

    response = client.get("/api/expenses", headers=other_headers)
    assert response.json() == []


def test_create_rejects_negative_amount(client, auth_headers):
    """Test amount validation."""
    response = client.post("/api/expenses", headers=auth_headers, json={**COFFEE, "amount": -1})
    assert response.status_code == 400


def test_create_rejects_bad_date(client, auth_headers):
    """Test date validation."""
    response = client.post(
        "/api/expenses", headers=auth_headers, json={**COFFEE, "date": "yesterday"}
    )
    assert response.status_code == 400


def test_create_requires_description(client, auth_headers):
    """Test that description is required."""
    body = {k: v for k, v in COFFEE.items() if k != "description"}
    response = client.post("/api/expenses", headers=auth_headers, json=body)
    assert response.status_code == 400


def test_create_without_category(client, auth_headers):
    """Test that category is optional."""
    body = {k: v for k, v in COFFEE.items() if k != "category"}
    response = client.post("/api/expenses", headers=auth_headers, json=body)
    assert response.status_code == 201
    assert response.json()["category"] is None


def test_list_is_newest_first(client, auth_headers):
    """Test ordering of the expense list."""
    first = create_expense(client, auth_headers, description="First")
    second = create_expense(client, auth_headers, description="Second")
    third = create_expense(client, auth_headers, description="Third")

    response = client.get("/api/expenses", headers=auth_headers)
    ids = [e["id"] for e in response.json()]
    assert ids == [third["id"], second["id"], first["id"]]


def test_list_only_returns_own_expenses(client, auth_headers, other_headers):
    """Test owner scoping of the list."""
    create_expense(client, auth_headers, description="Mine")
    create_expense(client, other_headers, description="Theirs")

    response = client.get("/api/expenses", headers=auth_headers)
    descriptions = [e["description"] for e in response.json()]
    assert descriptions == ["Mine"]


def test_update_expense(client, auth_headers):
    """Test patching an expense."""
    created = create_expense(client, auth_headers)

    response = client.put(
        f"/api/expenses/{created['id']}",
        headers=auth_headers,
        json={"description": "Latte", "amount": 5.25},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["description"] == "Latte"
    assert data["amount"] == 5.25
    assert data["category"] == "Food"
    assert data["date"] == "2024-01-01"
    assert data["updatedAt"] is not None
    assert data["createdAt"] == created["createdAt"]


def test_update_cannot_change_owner_or_id(client, auth_headers, other_headers):
    """Test that only the allowed fields can change."""
    created = create_expense(client, auth_headers)

    response = client.put(
        f"/api/expenses/{created['id']}",
        headers=auth_headers,
        json={"userId": other_headers.user_id, "id": "hijacked", "category": "Drinks"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["id"] == created["id"]
    assert data["userId"] == auth_headers.user_id
    assert data["category"] == "Drinks"


def test_update_other_users_expense_forbidden(client, auth_headers, other_headers):
    """Test that a user cannot edit someone else's expense."""
    created = create_expense(client, auth_headers)

    response = client.put(
        f"/api/expenses/{created['id']}",
        headers=other_headers,
        json={"description": "Mine now"},
    )
    assert response.status_code == 403

    response = client.get("/api/expenses", headers=auth_headers)
    assert response.json()[0]["description"] == "Coffee"


def test_update_missing_expense(client, auth_headers):
    """Test updating an unknown expense."""
    response = client.put(
        "/api/expenses/does-not-exist", headers=auth_headers, json={"description": "x"}
    )
    assert response.status_code == 404


def test_delete_expense(client, auth_headers):
    """Test deleting an expense."""
    created = create_expense(client, auth_headers)

    response = client.delete(f"/api/expenses/{created['id']}", headers=auth_headers)
    assert response.status_code == 204

    response = client.get("/api/expenses", headers=auth_headers)
    assert response.json() == []


def test_delete_other_users_expense_forbidden(client, auth_headers, other_headers):
    """Test that a user cannot delete someone else's expense."""
    created = create_expense(client, auth_headers)

    response = client.delete(f"/api/expenses/{created['id']}", headers=other_headers)
    assert response.status_code == 403

    response = client.get("/api/expenses", headers=auth_headers)
    assert len(response.json()) == 1


def test_delete_missing_expense(client, auth_headers):
    """Test deleting an unknown expense."""
    response = client.delete("/api/expenses/does-not-exist", headers=auth_headers)
    assert response.status_code == 404


def test_expenses_require_auth(client):
    """Test that endpoints require authentication."""
    assert client.get("/api/expenses").status_code == 401
    assert client.post("/api/expenses", json=COFFEE).status_code == 401


def test_update_null_category_clears_it(client, auth_headers):
    """Test that an explicit null clears the category but not other fields."""
    created = create_expense(client, auth_headers)

    response = client.put(
        f"/api/expenses/{created['id']}",
        headers=auth_headers,
        json={"category": None, "description": None},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["category"] is None
    assert data["description"] == "Coffee"


def test_update_without_category_keeps_it(client, auth_headers):
    """Test that an omitted category is left alone."""
    created = create_expense(client, auth_headers)

    response = client.put(
        f"/api/expenses/{created['id']}", headers=auth_headers, json={"amount": 3}
    )
    assert response.json()["category"] == "Food"
