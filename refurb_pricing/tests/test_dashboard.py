from decimal import Decimal

from refurb_pricing.services.dashboard_service import DashboardService


def test_dashboard_data(db, product_factory, spare_part_factory):
    product_factory(sale_price=Decimal("60000"))
    product_factory(model_number="Latitude 3400", sale_price=Decimal("20000"))
    spare_part_factory()

    data = DashboardService(db).dashboard_data()
    assert data["stats"] == {
        "total_products": 2,
        "high_value_products": 1,
        "total_spare_parts": 1,
        "total_inventory": 3,
    }
    assert len(data["recent_activity"]) == 3
    assert {a["type"] for a in data["recent_activity"]} == {"Product", "Spare Part"}


def test_recent_activity_is_capped(db, product_factory):
    for i in range(7):
        product_factory(model_number=f"Model {i}")
    assert len(DashboardService(db).dashboard_data()["recent_activity"]) == 5


def test_global_search(db, product_factory, spare_part_factory):
    product_factory(make="Lenovo", model_number="ThinkPad T480", cpu="i7", generation="8th")
    product_factory()
    spare_part_factory(make="Lenovo", model_number="ThinkPad X1")

    result = DashboardService(db).global_search("thinkpad")
    assert [p["model_number"] for p in result["products"]] == ["ThinkPad T480"]
    assert [s["model_number"] for s in result["spare_parts"]] == ["ThinkPad X1"]


def test_short_query_returns_nothing(db, product_factory):
    product_factory()
    assert DashboardService(db).global_search("d") == {"products": [], "spare_parts": []}
    assert DashboardService(db).global_search("") == {"products": [], "spare_parts": []}


def test_search_treats_wildcards_literally(db, product_factory):
    product_factory(model_number="Latitude 5420")
    underscored = product_factory(model_number="Latitude_5420 100%")
    service = DashboardService(db)

    assert service.global_search("5_20")["products"] == []
    assert [p["id"] for p in service.global_search("e_5420")["products"]] == [underscored.id]
    assert [p["id"] for p in service.global_search("100%")["products"]] == [underscored.id]
