# Semantic search policy (fixed, not tunable per request)
SEARCH_TOP_K = 3  # Nearest neighbours retrieved from the vector index
MIN_SEARCH_SCORE = 0.5  # Results must score strictly above this

# Payment listing
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

# Text embedded for each product
PRODUCT_TEXT_TEMPLATE = "[{name}] is a product that costs [{price}] and is described as [{description}]"
