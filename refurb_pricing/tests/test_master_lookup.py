from decimal import Decimal

from refurb_pricing.services.master_lookup_service import MasterLookupService


def test_exact_product_name_match_is_case_insensitive(db, product_factory):
    product = product_factory(product_name="Dell Latitude Special")
    found = MasterLookupService(db).find_product_by_name("dell latitude SPECIAL")
    assert found is not None
    assert found.id == product.id


def test_composite_key_match(db, product_factory, spare_part_factory):
    product = product_factory()
    part = spare_part_factory(front_panel=Decimal("1500"))
    lookup = MasterLookupService(db)

    assert lookup.find_product_by_name("Dell/Latitude 5420/i5/11th").id == product.id
    assert lookup.find_spare_part_by_name(" dell / LATITUDE 5420 / I5 / 11TH ").id == part.id


def test_missing_cpu_requires_null_column(db, product_factory):
    product_factory()  # cpu = i5
    lookup = MasterLookupService(db)
    assert lookup.find_product_by_name("Dell/Latitude 5420") is None

    bare = product_factory(model_number="Latitude 3400", cpu=None, generation=None)
    assert lookup.find_product_by_name("Dell/Latitude 3400").id == bare.id


def test_missing_make_or_model_returns_none(db, product_factory):
    product_factory()
    lookup = MasterLookupService(db)
    assert lookup.find_product_by_name("Dell") is None
    assert lookup.find_product_by_name("/Latitude 5420/i5/11th") is None
    assert lookup.find_product_by_name("") is None


def test_lookups_are_independent(db, product_factory):
    product_factory()
    lookup = MasterLookupService(db)
    assert lookup.find_product_by_name("Dell/Latitude 5420/i5/11th") is not None
    assert lookup.find_spare_part_by_name("Dell/Latitude 5420/i5/11th") is None


def test_non_ascii_names_match_as_spelled(db, product_factory):
    named = product_factory(product_name="Écran Spécial 14")
    composite = product_factory(make="Öztürk", model_number="Pro Ä1", cpu=None, generation=None)
    lookup = MasterLookupService(db)

    assert lookup.find_product_by_name("Écran Spécial 14").id == named.id
    assert lookup.find_product_by_name("Öztürk/PRO Ä1").id == composite.id
