"""Fixtures for the payment and search tests."""

from decimal import Decimal

import pytest

from eshop.domain.models.product import Product
from eshop.domain.services.index_builder_svc import SearchIndex, VectorIndexBuilder
from eshop.domain.services.search_svc import SemanticSearchService

from tests.fakes import FakeChat, FakeEmbedder, FakeProductRepo


def _product(pid, name, description, price):
    return Product(id=pid, name=name, description=description, price=Decimal(price),
                   image_url=f"https://img.example.com/product{pid}.png")


@pytest.fixture
def catalog():
    return [
        _product(1, "Camping Tent", "This tent is perfect for camping trips", "99.99"),
        _product(2, "Camping Lantern", "This lantern is perfect for lighting up your campsite", "19.99"),
        _product(3, "Camping Stove", "This stove is perfect for cooking outdoors", "49.99"),
        _product(4, "Hiking Poles", "Ideal for camping and hiking trips", "24.99"),
    ]


@pytest.fixture
def product_repo(catalog):
    return FakeProductRepo(catalog)


@pytest.fixture
def embedder():
    return FakeEmbedder(
        product_vectors={
            1: [1.0, 0.0, 0.0, 0.0],
            2: [0.0, 1.0, 0.0, 0.0],
            3: [0.0, 0.0, 1.0, 0.0],
            4: [0.7, 0.0, 0.0, 0.7],
        },
        query_vectors={
            "tent": [1.0, 0.0, 0.0, 0.0],
            "light for my campsite": [0.0, 0.6, 0.0, 0.8],
            "weather forecast": [0.0, 0.0, 0.0, -1.0],
            "stove or lantern": [0.0, 0.5, 0.5, 0.0],
        },
    )


@pytest.fixture
def chat():
    return FakeChat()


@pytest.fixture
def search_index(embedder):
    return SearchIndex(VectorIndexBuilder(embedder))


@pytest.fixture
def search_service(search_index, embedder, chat):
    return SemanticSearchService(search_index, embedder, chat)
