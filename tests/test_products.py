import pytest

class BaseProductTest:
    """Base class for product tests"""

    @pytest.fixture
    def base_url(self):
        """Base URL for product endpoints"""
        return "/api/products"

    @pytest.fixture
    def sample_product_data(self, test_categories):
        """Sample product data for creation/update tests"""
        return {
            "name": "Emerald Drop Earrings",
            "description": "Emerald drops set in yellow gold",
            "price": 8900,
            "stock": 3,
            "category_id": test_categories["Earrings"].id,
            "images": ["earrings/emerald-1.jpg", "earrings/emerald-2.jpg"]
        }

    def assert_product_response(self, product, expected_name, expected_price):
        """Helper method to check product response"""
        assert product["name"] == expected_name
        assert product["price"] == expected_price

class TestProductListing(BaseProductTest):
    """Test product listing functionality"""

    def test_list_products(self, client, test_products, base_url):
        """Test listing all products"""
        response = client.get(base_url)

        assert response.status_code == 200
        products = response.json()
        assert len(products) == 6
        self.assert_product_response(products[0], "Gold Wedding Ring", 3000)
        assert products[0]["category"] == "Rings"

    def test_list_products_pagination(self, client, test_products, base_url):
        """Test product listing pagination"""
        response = client.get(f"{base_url}?skip=1&limit=1")

        assert response.status_code == 200
        products = response.json()
        assert len(products) == 1
        self.assert_product_response(products[0], "Silver Ring", 2000)

    def test_list_products_by_category(self, client, test_products, test_categories, base_url):
        """Test listing products of one category"""
        category_id = test_categories["Necklaces"].id
        response = client.get(f"{base_url}/category/{category_id}")

        assert response.status_code == 200
        names = [product["name"] for product in response.json()]
        assert names == ["Diamond Solitaire Necklace", "Diamond Tennis Necklace"]

    def test_list_products_unknown_category(self, client, base_url):
        response = client.get(f"{base_url}/category/999")
        assert response.status_code == 404

class TestProductRetrieval(BaseProductTest):
    """Test product retrieval functionality"""

    def test_get_product_by_id(self, client, test_products, base_url):
        """Test getting a single product by ID"""
        product_id = test_products[0].id
        response = client.get(f"{base_url}/{product_id}")

        assert response.status_code == 200
        self.assert_product_response(response.json(), "Gold Wedding Ring", 3000)

    def test_get_nonexistent_product(self, client, base_url):
        """Test getting a product that doesn't exist"""
        response = client.get(f"{base_url}/999")

        assert response.status_code == 404
        assert "Product with id 999 not found" in response.json()["detail"]

class TestProductManagement(BaseProductTest):
    """Test product management functionality"""

    def test_create_product(self, client, base_url, sample_product_data):
        """Test creating a new product"""
        response = client.post(base_url, json=sample_product_data)

        assert response.status_code == 201
        product = response.json()
        self.assert_product_response(product, sample_product_data["name"], sample_product_data["price"])
        assert product["category"] == "Earrings"
        assert product["images"] == sample_product_data["images"]

    def test_created_product_is_searchable(self, client, base_url, sample_product_data):
        client.post(base_url, json=sample_product_data)

        response = client.get("/api/search", params={"q": "emerald earrings"})

        assert response.status_code == 200
        assert [p["name"] for p in response.json()["products"]] == ["Emerald Drop Earrings"]

    def test_create_product_unknown_category(self, client, base_url, sample_product_data):
        sample_product_data["category_id"] = 999
        response = client.post(base_url, json=sample_product_data)

        assert response.status_code == 404
        assert "Category with id 999 not found" in response.json()["detail"]

    def test_update_product(self, client, test_products, test_categories, base_url):
        """Test updating a product"""
        product_id = test_products[0].id

        response = client.put(
            f"{base_url}/{product_id}",
            json={"name": "Updated Gold Ring", "price": 3500, "category_id": test_categories["Earrings"].id}
        )

        assert response.status_code == 200
        product = response.json()
        self.assert_product_response(product, "Updated Gold Ring", 3500)
        assert product["description"] == "Classic 22k yellow gold band"
        assert product["category"] == "Earrings"

    def test_update_nonexistent_product(self, client, base_url):
        response = client.put(f"{base_url}/999", json={"price": 10})
        assert response.status_code == 404

    def test_delete_product(self, client, test_products, base_url):
        """Test deleting a product"""
        product_id = test_products[0].id

        response = client.delete(f"{base_url}/{product_id}")

        assert response.status_code == 200
        assert "Product deleted successfully" in response.json()["message"]
        assert client.get(f"{base_url}/{product_id}").status_code == 404

    def test_delete_nonexistent_product(self, client, base_url):
        """Test deleting a product that doesn't exist"""
        response = client.delete(f"{base_url}/999")

        assert response.status_code == 404

class TestProductValidation(BaseProductTest):
    """Test product validation"""

    def test_invalid_product_data(self, client, base_url, test_categories):
        """Test creating a product with invalid data"""
        invalid_data = {
            "name": "",  # Empty name
            "price": "invalid",  # Invalid price
            "category_id": test_categories["Rings"].id
        }

        response = client.post(base_url, json=invalid_data)

        assert response.status_code == 422  # Validation error

    def test_negative_price(self, client, base_url, sample_product_data):
        sample_product_data["price"] = -1
        response = client.post(base_url, json=sample_product_data)
        assert response.status_code == 422
