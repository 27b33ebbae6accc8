"""Expense API tests."""

from decimal import Decimal


def create_expense(client, headers, **overrides):
    body = {
        "description": "Groceries",
        "amount": "42.50",
        "date": "2024-01-15",
        "category": "FOOD",
    }
    body.update(overrides)
    response = client.post("/api/expenses", headers=headers, json=body)
    assert response.status_code == 201, response.text
    return response.json()


def test_create_expense(client, auth_headers):
    """Test creating an expense."""
    data = create_expense(
        client,
        auth_headers,
        description="Gas",
        amount=60.00,
        date="2024-01-20",
        category="TRANSPORTATION",
    )
    assert data["id"]
    assert data["description"] == "Gas"
    assert Decimal(data["amount"]) == Decimal("60.00")
    assert data["date"] == "2024-01-20"
    assert data["category"] == "TRANSPORTATION"
    assert data["categoryLabel"] == "Transportation"
    assert data["createdAt"]
    assert data["updatedAt"]


def test_create_expense_keeps_exact_amount(client, auth_headers):
    """Amounts are exact decimals, not floats."""
    data = create_expense(client, auth_headers, amount="0.10")
    assert data["amount"] == "0.10"


def test_create_expense_rejects_small_amount(client, auth_headers):
    """Test amounts under one cent are rejected."""
    response = client.post(
        "/api/expenses",
        headers=auth_headers,
        json={"description": "Free", "amount": "0.00", "date": "2024-01-15", "category": "FOOD"},
    )
    assert response.status_code == 400
    assert "amount" in response.json()["errors"]


def test_create_expense_rejects_fractional_cents(client, auth_headers):
    """Test amounts with more than two decimals are rejected."""
    response = client.post(
        "/api/expenses",
        headers=auth_headers,
        json={"description": "Odd", "amount": "1.005", "date": "2024-01-15", "category": "FOOD"},
    )
    assert response.status_code == 400


def test_create_expense_rejects_unknown_category(client, auth_headers):
    """Test categories outside the fixed set are rejected."""
    response = client.post(
        "/api/expenses",
        headers=auth_headers,
        json={"description": "Boat", "amount": "10", "date": "2024-01-15", "category": "YACHTS"},
    )
    assert response.status_code == 400
    assert "category" in response.json()["errors"]


def test_create_expense_requires_auth(client):
    """Test creating without a token fails."""
    response = client.post(
        "/api/expenses",
        json={"description": "Gas", "amount": "60", "date": "2024-01-20", "category": "FOOD"},
    )
    assert response.status_code == 401


def test_get_expense(client, auth_headers):
    """Test getting a specific expense."""
    created = create_expense(client, auth_headers)

    response = client.get(f"/api/expenses/{created['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == created


def test_get_missing_expense(client, auth_headers):
    """Test getting an expense that does not exist."""
    response = client.get("/api/expenses/99999", headers=auth_headers)
    assert response.status_code == 404
    assert response.json()["detail"] == "Expense not found with id: 99999"


def test_update_expense(client, auth_headers):
    """Test full replacement of an expense."""
    created = create_expense(client, auth_headers)

    response = client.put(
        f"/api/expenses/{created['id']}",
        headers=auth_headers,
        json={
            "description": "Electric bill",
            "amount": "120.99",
            "date": "2024-02-01",
            "category": "UTILITIES",
        },
    )
    assert response.status_code == 200
    data = response.json()
    assert data["id"] == created["id"]
    assert data["description"] == "Electric bill"
    assert data["amount"] == "120.99"
    assert data["date"] == "2024-02-01"
    assert data["category"] == "UTILITIES"
    assert data["createdAt"] == created["createdAt"]


def test_delete_expense(client, auth_headers):
    """Test deleting an expense."""
    created = create_expense(client, auth_headers)

    response = client.delete(f"/api/expenses/{created['id']}", headers=auth_headers)
    assert response.status_code == 204

    response = client.get(f"/api/expenses/{created['id']}", headers=auth_headers)
    assert response.status_code == 404


def test_expenses_are_isolated_between_users(client, auth_headers, other_auth_headers):
    """Another user can neither see, change nor delete an expense."""
    created = create_expense(
        client,
        auth_headers,
        description="Gas",
        amount="60.00",
        date="2024-01-20",
        category="TRANSPORTATION",
    )
    expense_url = f"/api/expenses/{created['id']}"

    listing = client.get("/api/expenses", headers=other_auth_headers).json()
    assert listing["totalElements"] == 0
    assert listing["content"] == []

    assert client.get(expense_url, headers=other_auth_headers).status_code == 404
    response = client.put(
        expense_url,
        headers=other_auth_headers,
        json={"description": "Mine now", "amount": "1", "date": "2024-01-20", "category": "FOOD"},
    )
    assert response.status_code == 404
    assert client.delete(expense_url, headers=other_auth_headers).status_code == 404

    response = client.get(expense_url, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["description"] == "Gas"


def test_list_expenses_default_sort(client, auth_headers):
    """Default listing is newest date first."""
    create_expense(client, auth_headers, date="2024-01-10")
    create_expense(client, auth_headers, date="2024-03-10")
    create_expense(client, auth_headers, date="2024-02-10")

    data = client.get("/api/expenses", headers=auth_headers).json()
    assert [e["date"] for e in data["content"]] == ["2024-03-10", "2024-02-10", "2024-01-10"]
    assert data["size"] == 10
    assert data["currentPage"] == 0


def test_list_expenses_sorted_by_amount(client, auth_headers):
    """Test sorting by amount ascending."""
    create_expense(client, auth_headers, amount="30.00")
    create_expense(client, auth_headers, amount="5.25")
    create_expense(client, auth_headers, amount="100.00")

    response = client.get(
        "/api/expenses", headers=auth_headers, params={"sortBy": "amount", "sortDir": "asc"}
    )
    assert response.status_code == 200
    assert [e["amount"] for e in response.json()["content"]] == ["5.25", "30.00", "100.00"]


def test_list_expenses_rejects_unknown_sort_field(client, auth_headers):
    """Test that only known fields can be sorted on."""
    response = client.get("/api/expenses", headers=auth_headers, params={"sortBy": "user_id"})
    assert response.status_code == 400
    assert response.json()["detail"].startswith("Cannot sort by 'user_id'")


def test_list_expenses_rejects_bad_sort_direction(client, auth_headers):
    """Test that sort direction must be asc or desc."""
    response = client.get("/api/expenses", headers=auth_headers, params={"sortDir": "sideways"})
    assert response.status_code == 400


def test_list_expenses_filter_by_category(client, auth_headers):
    """Test filtering by category."""
    create_expense(client, auth_headers, category="FOOD")
    create_expense(client, auth_headers, category="HOUSING")
    create_expense(client, auth_headers, category="FOOD")

    data = client.get("/api/expenses", headers=auth_headers, params={"category": "FOOD"}).json()
    assert data["totalElements"] == 2
    assert all(e["category"] == "FOOD" for e in data["content"])


def test_list_expenses_filter_by_date_range_is_inclusive(client, auth_headers):
    """Both ends of the date range are included."""
    for day in ("2024-01-10", "2024-01-15", "2024-01-20", "2024-01-25"):
        create_expense(client, auth_headers, date=day)

    data = client.get(
        "/api/expenses",
        headers=auth_headers,
        params={"startDate": "2024-01-15", "endDate": "2024-01-20", "sortDir": "asc"},
    ).json()
    assert [e["date"] for e in data["content"]] == ["2024-01-15", "2024-01-20"]


def test_list_expenses_filter_by_start_date_only(client, auth_headers):
    """Test an open-ended date range."""
    create_expense(client, auth_headers, date="2024-01-10")
    create_expense(client, auth_headers, date="2024-01-20")

    data = client.get(
        "/api/expenses", headers=auth_headers, params={"startDate": "2024-01-20"}
    ).json()
    assert [e["date"] for e in data["content"]] == ["2024-01-20"]


def test_list_expenses_filter_by_category_and_date(client, auth_headers):
    """Test combining category and date filters."""
    create_expense(client, auth_headers, category="FOOD", date="2024-01-10")
    create_expense(client, auth_headers, category="FOOD", date="2024-02-10")
    create_expense(client, auth_headers, category="EDUCATION", date="2024-01-12")

    data = client.get(
        "/api/expenses",
        headers=auth_headers,
        params={"category": "FOOD", "startDate": "2024-01-01", "endDate": "2024-01-31"},
    ).json()
    assert data["totalElements"] == 1
    assert data["content"][0]["date"] == "2024-01-10"


def test_list_expenses_rejects_inverted_date_range(client, auth_headers):
    """Test startDate after endDate is a bad request."""
    response = client.get(
        "/api/expenses",
        headers=auth_headers,
        params={"startDate": "2024-02-01", "endDate": "2024-01-01"},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "startDate must not be after endDate"


def test_list_expenses_pagination_metadata(client, auth_headers):
    """Test page metadata agrees with the row count."""
    for day in range(1, 13):
        create_expense(client, auth_headers, date=f"2024-01-{day:02d}")

    first = client.get("/api/expenses", headers=auth_headers, params={"size": 5}).json()
    assert first["totalElements"] == 12
    assert first["totalPages"] == 3
    assert first["size"] == 5
    assert len(first["content"]) == 5
    assert first["first"] is True
    assert first["last"] is False

    last = client.get(
        "/api/expenses", headers=auth_headers, params={"size": 5, "page": 2}
    ).json()
    assert len(last["content"]) == 2
    assert last["currentPage"] == 2
    assert last["first"] is False
    assert last["last"] is True

    seen = {e["id"] for e in first["content"]} | {e["id"] for e in last["content"]}
    middle = client.get(
        "/api/expenses", headers=auth_headers, params={"size": 5, "page": 1}
    ).json()
    seen |= {e["id"] for e in middle["content"]}
    assert len(seen) == 12


def test_list_expenses_empty(client, auth_headers):
    """Test an empty listing is both first and last page."""
    data = client.get("/api/expenses", headers=auth_headers).json()
    assert data["totalElements"] == 0
    assert data["totalPages"] == 0
    assert data["first"] is True
    assert data["last"] is True


def test_list_expenses_rejects_bad_paging(client, auth_headers):
    """Test negative pages and oversized pages are rejected."""
    for params in ({"page": -1}, {"size": 0}, {"size": 1000}):
        response = client.get("/api/expenses", headers=auth_headers, params=params)
        assert response.status_code == 400, params


def test_get_categories(client):
    """Test the category catalogue."""
    response = client.get("/api/expenses/categories")
    assert response.status_code == 200
    categories = response.json()
    assert len(categories) == 9
    assert {"value": "PERSONAL_CARE", "label": "Personal Care"} in categories
    assert categories[0] == {"value": "FOOD", "label": "Food"}
