"""Tests for the balance overview endpoints."""


def _hand_over(client, client_id, product_id, quantity):
    response = client.post(
        f"/api/v1/clients/{client_id}/products",
        json={"product_id": product_id, "quantity": quantity}
    )
    assert response.status_code == 200


def test_list_balances(client, create_client, create_product):
    """Test balances are computed per client and in total."""
    cheap = create_product(code="P1", name="Cheap", price=1.25)
    dear = create_product(code="P2", name="Dear", price=10.0)
    ana = create_client(name="Ana", code="C001")
    create_client(name="Luis", code="C002")
    _hand_over(client, ana["id"], cheap["id"], 4)
    _hand_over(client, ana["id"], dear["id"], 2)

    response = client.get("/api/v1/balances/")

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 2
    assert data["total_balance"] == 25.0
    rows = {row["name"]: row for row in data["items"]}
    assert rows["Ana"]["balance"] == 25.0
    assert rows["Ana"]["product_count"] == 2
    assert rows["Luis"]["balance"] == 0


def test_list_balances_filtered(client, create_client, create_product):
    """Test the overview honours balance filters."""
    product = create_product(price=2.0)
    ana = create_client(name="Ana", code="C001")
    create_client(name="Luis", code="C002")
    _hand_over(client, ana["id"], product["id"], 1)

    data = client.get("/api/v1/balances/?filters=no_balance").json()

    assert [row["name"] for row in data["items"]] == ["Luis"]
    assert data["total_balance"] == 0


def test_export_balances(client, create_client, create_product):
    """Test balance CSV export."""
    product = create_product(name="Widget", price=2.0)
    ana = create_client(name="Ana", code="C001")
    _hand_over(client, ana["id"], product["id"], 2)

    response = client.get("/api/v1/balances/export")

    assert response.status_code == 200
    assert response.text.splitlines() == [
        "Name,Code,Total Balance,Products",
        "Ana,C001,4.00,Widget (2)",
    ]
