import io

import pandas as pd


def _seed_masters(client):
    client.post("/products/", json={
        "make": "Dell", "model_number": "Latitude 5420", "cpu": "i5",
        "generation": "11th", "sale_price": 30000, "ram": "8GB",
    })
    client.post("/spare-parts/", json={
        "make": "Dell", "model_number": "Latitude 5420", "cpu": "i5",
        "generation": "11th", "front_panel": 1500,
    })


def test_product_crud(client):
    created = client.post("/products/", json={"make": "Dell", "model_number": "Latitude 5420", "sale_price": 30000})
    assert created.status_code == 201
    product_id = created.get_json()["data"]["id"]

    price = client.patch(f"/products/{product_id}/price", json={"sale_price": 28000})
    assert price.status_code == 200
    assert price.get_json()["data"]["sale_price"] == 28000.0

    listed = client.get("/products/").get_json()["data"]
    assert [p["id"] for p in listed] == [product_id]

    stats = client.get("/products/stats").get_json()["data"]
    assert stats["total_products"] == 1

    assert client.delete(f"/products/{product_id}").status_code == 200
    assert client.delete(f"/products/{product_id}").status_code == 404


def test_product_validation_returns_400(client):
    response = client.post("/products/", json={"make": "D", "model_number": "Latitude", "sale_price": 1})
    assert response.status_code == 400
    body = response.get_json()
    assert body["success"] is False
    assert body["error_type"] == "INPUT_ERROR"


def test_price_calculator_bulk_upload_json(client):
    _seed_masters(client)
    response = client.post("/price-calculator/bulk-upload", json={"rows": [
        {"Product Name": "Dell/Latitude 5420/i5/11th", "Front Panel": "broken"},
        {"Tag No": "no-name"},
    ]})
    assert response.status_code == 201
    assert response.get_json()["data"] == {"count": 1}

    calcs = client.get("/price-calculator/").get_json()["data"]
    assert len(calcs) == 1
    assert calcs[0]["repair_cost"] == 1500.0
    assert calcs[0]["suggested_sale_price"] == 28500.0


def test_price_calculator_bulk_upload_csv(client):
    _seed_masters(client)
    csv = "Product Name,Battery,Tag No\nDell/Latitude 5420/i5/11th,0,1001\n,broken,1002\n"
    response = client.post(
        "/price-calculator/bulk-upload",
        data={"file": (io.BytesIO(csv.encode("utf-8")), "units.csv")},
        content_type="multipart/form-data",
    )
    assert response.status_code == 201
    assert response.get_json()["data"]["count"] == 1
    calc = client.get("/price-calculator/").get_json()["data"][0]
    assert calc["tag_no"] == "1001"
    assert calc["battery"] == "ok"


def test_spare_parts_bulk_upload_xlsx(client):
    buffer = io.BytesIO()
    pd.DataFrame([
        {"Make": "Dell", "Model Number": "Latitude 5420", "Battery": 2000},
        {"Make": None, "Model Number": "orphan", "Battery": 10},
    ]).to_excel(buffer, index=False)
    buffer.seek(0)

    response = client.post(
        "/spare-parts/bulk-upload",
        data={"file": (buffer, "parts.xlsx")},
        content_type="multipart/form-data",
    )
    assert response.status_code == 201
    assert response.get_json()["data"]["count"] == 1
    parts = client.get("/spare-parts/").get_json()["data"]
    assert parts[0]["battery"] == 2000.0
    assert parts[0]["hinge"] is None


def test_bulk_upload_without_valid_rows(client):
    response = client.post("/price-calculator/bulk-upload", json={"rows": [{"Grade": "A"}]})
    assert response.status_code == 400
    assert response.get_json()["error"] == "No valid data found. Ensure 'Product Name' column exists."


def test_bulk_upload_rejects_bad_input(client):
    assert client.post("/price-calculator/bulk-upload", json={"rows": "x"}).status_code == 400
    response = client.post(
        "/products/bulk-upload",
        data={"file": (io.BytesIO(b"x"), "notes.txt")},
        content_type="multipart/form-data",
    )
    assert response.status_code == 400


def test_lookup_and_calculation_crud(client):
    _seed_masters(client)
    lookup = client.get("/price-calculator/lookup", query_string={"productName": "Dell/Latitude 5420/i5/11th"})
    assert lookup.status_code == 200
    assert lookup.get_json()["data"]["spare_parts"]["front_panel"] == 1500.0

    created = client.post("/price-calculator/", json={"product_name": "Dell/Latitude 5420/i5/11th", "grade": "A"})
    assert created.status_code == 201
    calc_id = created.get_json()["data"]["id"]

    updated = client.put(f"/price-calculator/{calc_id}", json={"product_name": "Dell/Latitude 5420/i5/11th", "grade": "B"})
    assert updated.get_json()["data"]["grade"] == "B"

    deleted = client.post("/price-calculator/bulk-delete", json={"ids": [calc_id]})
    assert deleted.get_json()["data"] == {"count": 1}
    assert client.post("/price-calculator/bulk-delete", json={}).status_code == 400


def test_dashboard_and_search(client):
    _seed_masters(client)
    data = client.get("/dashboard/").get_json()["data"]
    assert data["stats"]["total_inventory"] == 2

    found = client.get("/dashboard/search", query_string={"q": "latitude"}).get_json()["data"]
    assert len(found["products"]) == 1
    assert len(found["spare_parts"]) == 1


def test_unknown_route_returns_json(client):
    response = client.get("/nope")
    assert response.status_code == 404
    assert response.get_json()["success"] is False
