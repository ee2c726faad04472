"""Integration tests for the catalog API"""

import io

from fastapi.testclient import TestClient


class TestCatalogAPI:
    """Test GET/POST/DELETE /api/v1/catalog"""

    def test_list_catalog(self, client: TestClient):
        response = client.get("/api/v1/catalog")

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 3
        assert [p["name"] for p in data["items"]] == [
            "Century Plywood",
            "Hettich Soft Close Hinge",
            "Laminate Sheet",
        ]

    def test_import_csv(self, client: TestClient):
        csv_data = b"id,name,category,thickness,pricePerUnit,unit\n10,Marine Plywood,Plywood,18mm,3200,sheets\n"

        response = client.post(
            "/api/v1/catalog/import",
            files={"file": ("products.csv", io.BytesIO(csv_data), "text/csv")},
        )

        assert response.status_code == 200
        assert response.json()["imported_count"] == 1

        listed = client.get("/api/v1/catalog").json()
        assert listed["total"] == 4
        assert listed["items"][-1]["pricePerUnit"] == 3200.0

    def test_import_missing_columns(self, client: TestClient):
        response = client.post(
            "/api/v1/catalog/import",
            files={"file": ("products.csv", io.BytesIO(b"name\nPlywood\n"), "text/csv")},
        )

        assert response.status_code == 400

    def test_clear_catalog(self, client: TestClient):
        response = client.delete("/api/v1/catalog")

        assert response.status_code == 204
        assert client.get("/api/v1/catalog").json()["total"] == 0
