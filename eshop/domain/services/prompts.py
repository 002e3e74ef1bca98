from typing import Sequence

from eshop.domain.models.product import Product

SYSTEM_PROMPT = (
    "You are a useful assistant. You always reply with a short and funny message. "
    "If you do not know an answer, you say 'I don't know that.' "
    "You only answer questions related to outdoor camping products. "
    "For any other type of questions, explain to the user that you only answer outdoor camping products questions. "
    "Do not store memory of the chat conversation."
)


def no_answer(query: str) -> str:
    return f"I don't know the answer for your question. Your question is: [{query}]"


def keyword_summary(query: str, count: int) -> str:
    return f"{count} Products found for [{query}]"


def _product_lines(products: Sequence[Product]) -> str:
    lines = []
    for position, p in enumerate(products, start=1):
        lines.append(f"- Product {position}:")
        lines.append(f"  - Name: {p.name}")
        lines.append(f"  - Description: {p.description or ''}")
        lines.append(f"  - Price: {p.price}")
    return "\n".join(lines)


def user_prompt(query: str, products: Sequence[Product]) -> str:
    return (
        "You are an intelligent assistant helping clients with their search about outdoor products.\n"
        "Generate a catchy and friendly message using the information below.\n"
        "Add a comparison between the products found and the search criteria.\n"
        "Include products details.\n"
        f"    - User Question: {query}\n"
        "    - Found Products:\n"
        f"{_product_lines(products)}"
    )


def search_messages(query: str, products: Sequence[Product]) -> list[dict]:
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": user_prompt(query, products)},
    ]
