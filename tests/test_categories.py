import pytest

@pytest.fixture
def base_url():
    """Base URL for category endpoints"""
    return "/api/categories"

def test_create_category(client, base_url):
    response = client.post(base_url, json={"name": "Anklets", "description": "Ankle chains"})

    assert response.status_code == 201
    category = response.json()
    assert category["name"] == "Anklets"
    assert category["id"] > 0

def test_create_duplicate_category(client, test_categories, base_url):
    response = client.post(base_url, json={"name": "Rings"})

    assert response.status_code == 409
    assert "already exists" in response.json()["detail"]

def test_list_categories(client, test_categories, base_url):
    response = client.get(base_url)

    assert response.status_code == 200
    assert [category["name"] for category in response.json()] == [
        "Bracelets", "Earrings", "Necklaces", "Rings"
    ]

def test_get_category(client, test_categories, base_url):
    category_id = test_categories["Rings"].id
    response = client.get(f"{base_url}/{category_id}")

    assert response.status_code == 200
    assert response.json()["name"] == "Rings"

def test_get_nonexistent_category(client, base_url):
    response = client.get(f"{base_url}/999")

    assert response.status_code == 404
    assert "Category with id 999 not found" in response.json()["detail"]

def test_delete_empty_category(client, test_categories, base_url):
    category_id = test_categories["Bracelets"].id

    response = client.delete(f"{base_url}/{category_id}")

    assert response.status_code == 200
    assert client.get(f"{base_url}/{category_id}").status_code == 404

def test_delete_category_in_use(client, test_products, test_categories, base_url):
    response = client.delete(f"{base_url}/{test_categories['Rings'].id}")

    assert response.status_code == 409
