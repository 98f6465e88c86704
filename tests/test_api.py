"""
HTTP surface: auth, menu, stock, transactions and summaries through FastAPI
"""
API = "/api/v1"


def first_item(client, headers, name):
    items = client.get(f"{API}/menu", params={"search": name}, headers=headers).json()
    return next(item for item in items if item["name"] == name)


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "healthy", "database": True}


def test_requires_authentication(client):
    assert client.get(f"{API}/menu").status_code == 401
    r = client.get(f"{API}/menu", headers={"Authorization": "Bearer not.a.token"})
    assert r.status_code == 401


def test_bad_login(client):
    r = client.post(f"{API}/auth/token", data={"username": "admin", "password": "wrong"})
    assert r.status_code == 401


def test_me(client, staff_headers):
    r = client.get(f"{API}/auth/me", headers=staff_headers)
    assert r.status_code == 200
    assert r.json()["username"] == "Chai-fi"
    assert r.json()["role"] == "staff"


def test_menu_uses_camel_case(client, staff_headers):
    items = client.get(f"{API}/menu", headers=staff_headers).json()
    assert len(items) == 8
    chai = next(item for item in items if item["name"] == "Masala Chai")
    assert chai["price"] == "25.00"
    assert chai["stockQuantity"] == 100
    assert chai["stockStatus"] == "in_stock"

    r = client.get(f"{API}/menu/{chai['id']}", headers=staff_headers)
    assert r.json()["id"] == chai["id"]
    assert client.get(f"{API}/menu/nope", headers=staff_headers).status_code == 404


def test_staff_cannot_run_admin_operations(client, staff_headers):
    assert client.post(f"{API}/stock/reset", json={"resetType": "all"}, headers=staff_headers).status_code == 403
    assert client.delete(f"{API}/transactions/delete-all", headers=staff_headers).status_code == 403
    assert client.delete(f"{API}/summaries/daily/2025-01-08", headers=staff_headers).status_code == 403


def test_sale_updates_stock_and_summaries(client, staff_headers):
    chai = first_item(client, staff_headers, "Masala Chai")

    r = client.post(f"{API}/transactions", headers=staff_headers, json={
        "date": "2025-01-08",
        "items": [{"id": chai["id"], "name": "Masala Chai", "price": "25.00", "quantity": 2}],
        "totalAmount": "50.00",
        "paymentMethod": "split",
        "splitPayment": {"gpayAmount": "30.00", "cashAmount": "20.00"},
    })
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["totalAmount"] == "50.00"
    assert body["billerName"] == "Sriram"
    assert body["splitPayment"] == {"gpayAmount": "30.00", "cashAmount": "20.00"}

    assert first_item(client, staff_headers, "Masala Chai")["stockQuantity"] == 98

    daily = client.get(f"{API}/summaries/daily/2025-01-08", headers=staff_headers).json()
    assert daily["totalAmount"] == "50.00"
    assert daily["gpayAmount"] == "30.00"
    assert daily["cashAmount"] == "20.00"
    assert daily["orderCount"] == 1

    weekly = client.get(f"{API}/summaries/weekly", headers=staff_headers).json()
    assert weekly[0]["weekStart"] == "2025-01-06"
    assert weekly[0]["weekEnd"] == "2025-01-12"

    monthly = client.get(f"{API}/summaries/monthly/2025-01", headers=staff_headers).json()
    assert monthly["orderCount"] == 1

    sales = client.get(f"{API}/menu/sales", params={"date": "2025-01-08"}, headers=staff_headers).json()
    assert sales == [{"item_id": chai["id"], "name": "Masala Chai", "quantity": 2, "total_price": "50.00"}]

    listed = client.get(f"{API}/transactions", params={"date": "2025-01-08"}, headers=staff_headers).json()
    assert [t["id"] for t in listed] == [body["id"]]


def test_insufficient_stock_is_a_conflict(client, staff_headers):
    samosa = first_item(client, staff_headers, "Samosa")
    client.put(f"{API}/stock/{samosa['id']}", json={"stockQuantity": 2}, headers=staff_headers)

    r = client.post(f"{API}/transactions", headers=staff_headers, json={
        "date": "2025-01-08",
        "items": [{"id": samosa["id"], "quantity": 3}],
        "totalAmount": "60.00",
        "paymentMethod": "cash",
    })

    assert r.status_code == 409
    assert r.json() == {
        "error": "Insufficient stock for Samosa. Available: 2, Requested: 3",
        "details": {"item": "Samosa", "available": 2, "requested": 3},
    }
    assert client.get(f"{API}/summaries/daily/2025-01-08", headers=staff_headers).status_code == 404


def test_sale_validation(client, staff_headers):
    r = client.post(f"{API}/transactions", headers=staff_headers, json={
        "date": "2025-01-08", "items": [], "totalAmount": "0.00", "paymentMethod": "cash",
    })
    assert r.status_code == 422

    r = client.post(f"{API}/transactions", headers=staff_headers, json={
        "date": "2025-01-08", "items": [{"id": "x", "quantity": 1}], "totalAmount": "1", "paymentMethod": "card",
    })
    assert r.status_code == 422


def test_out_of_range_amounts_are_rejected(client, staff_headers):
    chai = first_item(client, staff_headers, "Masala Chai")

    for total in ("1e20", "1e100000", "12.345"):
        r = client.post(f"{API}/transactions", headers=staff_headers, json={
            "date": "2025-01-08",
            "items": [{"id": chai["id"], "quantity": 1}],
            "totalAmount": total,
            "paymentMethod": "cash",
        })
        assert r.status_code == 422, total

    assert first_item(client, staff_headers, "Masala Chai")["stockQuantity"] == 100
    assert client.get(f"{API}/summaries/daily/2025-01-08", headers=staff_headers).status_code == 404


def test_set_stock(client, staff_headers):
    tea = first_item(client, staff_headers, "Green Tea")

    r = client.put(f"{API}/stock/{tea['id']}", json={"stockQuantity": 0}, headers=staff_headers)
    assert r.json()["available"] is False
    assert r.json()["stockStatus"] == "out_of_stock"

    r = client.put(f"{API}/stock/{tea['id']}", json={"stockQuantity": -3}, headers=staff_headers)
    assert r.status_code == 422


def test_reset_stock(client, admin_headers):
    r = client.post(f"{API}/stock/reset", json={"resetType": "today"}, headers=admin_headers)
    assert r.status_code == 200
    body = r.json()
    assert body["resetType"] == "today"
    assert body["message"] == f"Stock reset for {len(body['items'])} items"
    assert all(item["stockQuantity"] == 0 and item["available"] for item in body["items"])


def test_menu_create_and_patch(client, admin_headers, staff_headers):
    r = client.post(f"{API}/menu", headers=admin_headers, json={
        "name": "Filter Coffee", "price": "35", "category": "Coffee",
    })
    assert r.status_code == 201
    created = r.json()
    assert created["stockQuantity"] == 100
    assert created["price"] == "35.00"

    r = client.patch(f"{API}/menu/{created['id']}", json={"price": "38.00"}, headers=staff_headers)
    assert r.json()["price"] == "38.00"
    assert r.json()["name"] == "Filter Coffee"


def test_clear_day_and_bulk_deletes(client, admin_headers):
    chai = first_item(client, admin_headers, "Masala Chai")
    for day in ("2025-01-08", "2025-01-08", "2025-01-09"):
        client.post(f"{API}/transactions", headers=admin_headers, json={
            "date": day, "items": [{"id": chai["id"], "quantity": 1}],
            "totalAmount": "25.00", "paymentMethod": "gpay",
        })

    r = client.delete(f"{API}/summaries/daily/2025-01-08", headers=admin_headers)
    assert r.json() == {"period": "2025-01-08", "deletedCount": 2}

    weekly = client.get(f"{API}/summaries/weekly/2025-01-06", headers=admin_headers).json()
    assert weekly["totalAmount"] == "25.00"
    assert weekly["orderCount"] == 1

    r = client.delete(f"{API}/transactions/item/{chai['id']}/date/2025-01-09", headers=admin_headers)
    assert r.json() == {"deletedCount": 1}
    assert client.delete(f"{API}/transactions/delete-all", headers=admin_headers).json() == {"deletedCount": 0}


def test_month_key_is_validated(client, admin_headers):
    assert client.get(f"{API}/summaries/monthly/2025-13", headers=admin_headers).status_code == 422
    assert client.delete(f"{API}/summaries/monthly/2025-01", headers=admin_headers).json() == {
        "period": "2025-01", "deletedCount": 0
    }
