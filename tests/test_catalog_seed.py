from decimal import Decimal

from eshop.domain.services.catalog_seed import SEED_PRODUCTS, seed_catalog

from tests.fakes import FakeProductRepo


async def test_seeds_empty_catalog():
    repo = FakeProductRepo([])

    inserted = await seed_catalog(repo)

    assert inserted == len(SEED_PRODUCTS) == 9
    assert repo.products[1].name == "Solar Powered Flashlight"
    assert repo.products[9].price == Decimal("99.99")
    assert repo.products[9].image_url.endswith("/product9.png")


async def test_populated_catalog_is_left_alone(catalog):
    repo = FakeProductRepo(catalog)

    assert await seed_catalog(repo) == 0
    assert len(repo.products) == 4
