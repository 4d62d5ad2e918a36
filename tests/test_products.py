"""Tests for Product API endpoints."""


def test_create_product(client):
    """Test creating a new product."""
    response = client.post(
        "/api/v1/products/",
        json={
            "code": "P1",
            "name": "Test Product",
            "price": 99.99,
            "inventory": 10
        }
    )

    assert response.status_code == 201
    data = response.json()
    assert data["code"] == "P1"
    assert data["name"] == "Test Product"
    assert data["price"] == 99.99
    assert data["inventory"] == 10
    assert "id" in data


def test_create_product_invalid_price(client):
    """Test creating product with invalid price fails."""
    response = client.post(
        "/api/v1/products/",
        json={
            "code": "P1",
            "name": "Test Product",
            "price": -10.00,  # Invalid: negative price
            "inventory": 10
        }
    )

    assert response.status_code == 422  # Validation error


def test_create_product_invalid_inventory(client):
    """Test creating product with negative inventory fails."""
    response = client.post(
        "/api/v1/products/",
        json={
            "code": "P1",
            "name": "Test Product",
            "price": 99.99,
            "inventory": -5  # Invalid: negative inventory
        }
    )

    assert response.status_code == 422


def test_create_product_short_name(client):
    """Test product name needs at least two characters."""
    response = client.post(
        "/api/v1/products/",
        json={"code": "P1", "name": "X", "price": 1.0, "inventory": 0}
    )

    assert response.status_code == 422
    assert response.json()["detail"][0]["loc"] == ["body", "name"]


def test_created_ids_are_unique(client, create_product):
    """Test products created back to back get distinct ids."""
    ids = {create_product(code=f"P{i}")["id"] for i in range(5)}

    assert len(ids) == 5


def test_get_product(client, create_product):
    """Test getting a product by ID."""
    product_id = create_product(name="Test Product")["id"]

    response = client.get(f"/api/v1/products/{product_id}")

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == product_id
    assert data["name"] == "Test Product"


def test_get_product_not_found(client):
    """Test getting non-existent product returns 404."""
    response = client.get("/api/v1/products/9999")

    assert response.status_code == 404


def test_list_products(client, create_product):
    """Test listing products with pagination."""
    for i in range(15):
        create_product(code=f"P{i}", name=f"Product {i}", price=10.00 + i)

    response = client.get("/api/v1/products/?page=1&page_size=10")

    assert response.status_code == 200
    data = response.json()
    assert len(data["items"]) == 10
    assert data["total"] == 15
    assert data["total_pages"] == 2
    # Catalog order is creation order
    assert data["items"][0]["code"] == "P0"


def test_update_product(client, create_product):
    """Test updating a product."""
    product_id = create_product(name="Original Name", price=50.00, inventory=10)["id"]

    response = client.put(
        f"/api/v1/products/{product_id}",
        json={"name": "Updated Name", "price": 75.00}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == product_id
    assert data["name"] == "Updated Name"
    assert data["price"] == 75.00
    assert data["inventory"] == 10  # Inventory should remain unchanged


def test_update_product_not_found(client):
    """Test updating non-existent product returns 404."""
    response = client.put("/api/v1/products/9999", json={"name": "Nothing"})

    assert response.status_code == 404


def test_delete_product(client, create_product):
    """Test deleting a product."""
    product_id = create_product(name="To Delete")["id"]

    response = client.delete(f"/api/v1/products/{product_id}")
    assert response.status_code == 204

    get_response = client.get(f"/api/v1/products/{product_id}")
    assert get_response.status_code == 404


def test_delete_product_not_found(client):
    """Test deleting non-existent product returns 404."""
    response = client.delete("/api/v1/products/9999")

    assert response.status_code == 404


def test_search_products(client, create_product):
    """Test searching products by name or code."""
    create_product(code="W-1", name="Widget")
    create_product(code="G-1", name="Gadget")

    response = client.get("/api/v1/products/?search=wid")

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 1
    assert data["items"][0]["name"] == "Widget"

    response = client.get("/api/v1/products/?search=g-1")
    assert [item["name"] for item in response.json()["items"]] == ["Gadget"]


def test_filter_products_by_stock(client, create_product):
    """Test stock filters, alone and combined."""
    create_product(code="A", name="Stocked", inventory=3)
    create_product(code="B", name="Empty", inventory=0)

    in_stock = client.get("/api/v1/products/?filters=in_stock").json()
    assert [item["name"] for item in in_stock["items"]] == ["Stocked"]

    out_of_stock = client.get("/api/v1/products/?filters=out_of_stock").json()
    assert [item["name"] for item in out_of_stock["items"]] == ["Empty"]

    both = client.get("/api/v1/products/?filters=in_stock&filters=out_of_stock").json()
    assert both["total"] == 2


def test_unknown_filter_rejected(client):
    """Test an unknown filter tag is a validation error."""
    response = client.get("/api/v1/products/?filters=has_balance")

    assert response.status_code == 422


def test_import_products(client):
    """Test bulk import appends parsed products to the catalog."""
    data = "P1\tWidget\t10\t$1,200.50\n\tNo code\t1\t1\nP2\tGadget\tabc\t"

    response = client.post("/api/v1/products/import", json={"data": data})

    assert response.status_code == 201
    body = response.json()
    assert body["imported"] == 2
    assert [item["code"] for item in body["items"]] == ["P1", "P2"]
    assert body["items"][0]["price"] == 1200.50
    assert body["items"][1]["inventory"] == 0

    listing = client.get("/api/v1/products/").json()
    assert listing["total"] == 2


def test_import_ids_do_not_collide(client, create_product):
    """Test imported ids are distinct from each other and from the catalog."""
    existing = create_product()["id"]

    response = client.post(
        "/api/v1/products/import",
        json={"data": "A\tOne\t1\t1\nB\tTwo\t1\t1\nC\tThree\t1\t1"}
    )

    ids = [item["id"] for item in response.json()["items"]]
    assert len(set(ids)) == 3
    assert existing not in ids
    assert min(ids) > existing


def test_import_nothing_valid(client):
    """Test an import without valid lines fails and stores nothing."""
    response = client.post(
        "/api/v1/products/import",
        json={"data": "\tWidget\t10\t5\nonly\ttwo"}
    )

    assert response.status_code == 400
    assert "No valid products" in response.json()["detail"]
    assert client.get("/api/v1/products/").json()["total"] == 0


def test_product_clients(client, create_product, create_client):
    """Test listing the clients holding a product."""
    product = create_product()
    holder = create_client(name="Holder")
    create_client(name="Other", code="C002")

    client.post(
        f"/api/v1/clients/{holder['id']}/products",
        json={"product_id": product["id"], "quantity": 2}
    )

    response = client.get(f"/api/v1/products/{product['id']}/clients")

    assert response.status_code == 200
    assert [c["name"] for c in response.json()] == ["Holder"]


def test_product_clients_not_found(client):
    """Test listing holders of an unknown product returns 404."""
    response = client.get("/api/v1/products/9999/clients")

    assert response.status_code == 404


def test_export_products(client, create_product, create_client):
    """Test catalog CSV export lists holders per product."""
    widget = create_product(code="P1", name="Widget", price=1200.5, inventory=3)
    create_product(code="P2", name="Gadget", price=2, inventory=0)
    holder = create_client(name="Ana")
    client.post(
        f"/api/v1/clients/{holder['id']}/products",
        json={"product_id": widget["id"], "quantity": 1}
    )

    response = client.get("/api/v1/products/export")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    lines = response.text.splitlines()
    assert lines[0] == "Code,Name,Price,Inventory,Clients"
    assert lines[1] == "P1,Widget,1200.50,3,Ana"
    assert lines[2] == "P2,Gadget,2.00,0,"


def test_export_products_filtered(client, create_product):
    """Test catalog export follows the search term."""
    create_product(code="P1", name="Widget")
    create_product(code="P2", name="Gadget")

    response = client.get("/api/v1/products/export?search=gad")

    lines = response.text.splitlines()
    assert len(lines) == 2
    assert lines[1].startswith("P2,Gadget")
