from decimal import Decimal

from eshop.domain.errors import ProviderError
from eshop.domain.models.product import ProductVector, ScoredProductVector
from eshop.domain.services.index_builder_svc import IndexState
from eshop.domain.services.search_svc import keyword_search

from tests.fakes import FakeProductRepo


async def test_first_search_builds_index_lazily(search_service, search_index, product_repo, embedder):
    assert search_index.state is IndexState.EMPTY

    await search_service.search("tent", product_repo)

    assert search_index.state is IndexState.READY
    assert len(embedder.product_calls) == 4


async def test_search_returns_products_above_threshold(search_service, product_repo, chat):
    res = await search_service.search("light for my campsite", product_repo)

    # lantern scores 0.6, hiking poles ~0.57, the rest 0
    assert [p.name for p in res.products] == ["Camping Lantern", "Hiking Poles"]
    assert res.response_text == chat.reply


async def test_chat_gets_persona_and_composed_prompt(search_service, product_repo, chat):
    await search_service.search("tent", product_repo)

    assert len(chat.calls) == 1
    system, user = chat.calls[0]
    assert system["role"] == "system"
    assert "outdoor camping products" in system["content"]
    assert user["role"] == "user"
    assert "User Question: tent" in user["content"]
    assert "- Product 1:" in user["content"]
    assert "Name: Camping Tent" in user["content"]
    assert "Price: 99.99" in user["content"]


async def test_only_matching_neighbours_are_kept(search_service, product_repo):
    res = await search_service.search("stove or lantern", product_repo)

    assert sorted(p.id for p in res.products) == [2, 3]


async def test_top_three_cap_is_applied(search_service, product_repo, embedder):
    # every product is a perfect match
    embedder.product_vectors = {pid: [1.0, 0.0, 0.0, 0.0] for pid in (1, 2, 3, 4)}

    res = await search_service.search("tent", product_repo)

    assert len(res.products) == 3


async def test_no_match_returns_default_answer_without_chat(search_service, product_repo, chat):
    res = await search_service.search("weather forecast", product_repo)

    assert res.products == []
    assert res.response_text.startswith("I don't know")
    assert "[weather forecast]" in res.response_text
    assert chat.calls == []


async def test_empty_catalog_search_does_not_crash(search_service, search_index, chat):
    res = await search_service.search("tent", FakeProductRepo([]))

    assert res.products == []
    assert res.response_text.startswith("I don't know")
    assert search_index.state is IndexState.READY


async def test_deleted_product_is_skipped(search_service, search_index, product_repo):
    await search_index.ensure_ready(product_repo)
    del product_repo.products[1]

    res = await search_service.search("tent", product_repo)

    # tent is still indexed but gone from the catalog
    assert [p.id for p in res.products] == [4]


async def test_score_exactly_at_threshold_is_dropped(search_service, search_index, product_repo, chat):
    class FixedIndex:
        def top_k(self, query, k):
            rec = ProductVector(id=3, name="Camping Stove", price=Decimal("49.99"), vector=[0.0])
            return [ScoredProductVector(record=rec, score=0.5)]

    search_index.index = FixedIndex()
    search_index.state = IndexState.READY

    res = await search_service.search("tent", product_repo)

    assert res.products == []
    assert chat.calls == []


async def test_embedding_failure_becomes_error_text(search_service, search_index, product_repo, embedder):
    await search_index.ensure_ready(product_repo)
    embedder.fail_queries = True

    res = await search_service.search("tent", product_repo)

    assert res.response_text == "An error occurred: embedding request failed: quota exceeded"
    assert res.products == []


async def test_chat_failure_keeps_collected_products(search_service, product_repo, chat):
    chat.error = ProviderError("chat completion failed: timeout")

    res = await search_service.search("tent", product_repo)

    assert res.response_text == "An error occurred: chat completion failed: timeout"
    assert [p.id for p in res.products] == [1, 4]


async def test_index_build_failure_becomes_error_text(search_service):
    class BrokenRepo(FakeProductRepo):
        async def list_all(self):
            raise RuntimeError("mongo down")

    res = await search_service.search("tent", BrokenRepo())

    assert res.response_text == "An error occurred: mongo down"
    assert res.products == []


async def test_keyword_search_matches_name_substring(product_repo):
    res = await keyword_search("camping", product_repo)

    assert [p.id for p in res.products] == [1, 2, 3]
    assert res.response_text == "3 Products found for [camping]"
