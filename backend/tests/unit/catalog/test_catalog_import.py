"""Unit tests for catalog CSV import"""

import pytest

from catalog.import_service import CatalogImportError, CatalogImportService
from catalog.store import InMemoryCatalog


CSV_HEADER = "name,category,brand,size,thickness,sku,pricePerUnit,currentStock,minStock,unit\n"


@pytest.fixture
def catalog():
    return InMemoryCatalog()


@pytest.fixture
def service(catalog):
    return CatalogImportService(catalog)


class TestCatalogImport:
    """Test CSV parsing, validation and upsert"""

    def test_import_valid_rows(self, service, catalog):
        csv_data = (
            CSV_HEADER
            + "Century Plywood,Plywood,Century,8x4 feet,18mm,PLY-18,\"2,500\",40,5,sheets\n"
            + "Soft Close Hinge,Hardware,Hettich,,,HIN-01,150,200,20,pieces\n"
        ).encode("utf-8")

        result = service.import_from_csv(csv_data)

        assert result.total_rows == 2
        assert result.imported_count == 2
        assert result.error_count == 0

        plywood, hinge = catalog.list_products()
        assert plywood.id == "PLY-18"
        assert plywood.price_per_unit == 2500.0
        assert plywood.thickness == "18mm"
        assert hinge.size is None
        assert hinge.unit == "pieces"

    def test_invalid_rows_reported(self, service, catalog):
        csv_data = (
            CSV_HEADER
            + ",Plywood,,,,,,,,\n"
            + "Laminate,,,,,,,,,\n"
            + "Edge Tape,Hardware,,,,,abc,,,m\n"
            + "Handle,Hardware,,,,,120,,,pieces\n"
        ).encode("utf-8")

        result = service.import_from_csv(csv_data)

        assert result.total_rows == 4
        assert result.imported_count == 1
        assert [e.row for e in result.errors] == [2, 3, 4]
        assert "pricePerUnit" in result.errors[2].error
        # no id or sku: identified by row position
        assert catalog.list_products()[0].id == 4

    def test_id_column_and_upsert(self, service, catalog):
        service.import_from_csv(b"id,name,category\n7,Plywood,Plywood\n")
        service.import_from_csv(b"id,name,category\n7,Marine Plywood,Plywood\n")

        products = catalog.list_products()
        assert len(products) == 1
        assert products[0].id == 7
        assert products[0].name == "Marine Plywood"

    def test_utf8_bom_and_latin1(self, service, catalog):
        service.import_from_csv("\ufeffname,category\nPlywood,Plywood\n".encode("utf-8"))
        service.import_from_csv("name,category,sku\nCaf\u00e9 Panel,Panels,CP-1\n".encode("latin-1"))

        names = [p.name for p in catalog.list_products()]
        assert names[0] == "Plywood"
        assert len(names) == 2

    def test_missing_required_columns(self, service):
        with pytest.raises(CatalogImportError, match="category"):
            service.import_from_csv(b"name,brand\nPlywood,Century\n")

    def test_empty_file(self, service):
        with pytest.raises(CatalogImportError):
            service.import_from_csv(b"")


class TestInMemoryCatalog:
    def test_clear(self, catalog_products):
        catalog = InMemoryCatalog(catalog_products)
        assert len(catalog) == 3

        catalog.clear()

        assert catalog.list_products() == []
