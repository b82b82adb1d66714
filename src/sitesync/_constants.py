"""Internal constants shared across the library."""

FIRESTORE_BASE_URL = "https://firestore.googleapis.com/v1"
DEFAULT_DATABASE = "(default)"
ROOT_COLLECTION = "websiteData"
USER_AGENT = "sitesync/1"

# ------------------------------------------------------------------
# Local cache keys
# ------------------------------------------------------------------

CACHE_KEY_CONTENT = "content"
CACHE_KEY_FOOTER = "footerContent"
CACHE_KEY_CATEGORIES = "categories"
CACHE_KEY_PRODUCTS = "products"
CACHE_KEY_SLIDES = "heroSlides"

# ------------------------------------------------------------------
# Remote documents (relative to the root collection)
# ------------------------------------------------------------------

DOC_CONTENT = "content"
DOC_FOOTER = "footer"
DOC_AGGREGATE = "allData"
DOC_CONNECTION_TEST = "connectionTest"
DOC_CATEGORIES = "categories"
DOC_PRODUCTS = "products"
DOC_SLIDES = "slides"
ITEMS_SUBCOLLECTION = "items"

# ------------------------------------------------------------------
# Aggregate document fields  →  local cache keys
# ------------------------------------------------------------------

AGGREGATE_FIELD_TO_CACHE_KEY: dict[str, str] = {
    "content": CACHE_KEY_CONTENT,
    "footerContent": CACHE_KEY_FOOTER,
    "categories": CACHE_KEY_CATEGORIES,
    "products": CACHE_KEY_PRODUCTS,
    "slides": CACHE_KEY_SLIDES,
    # Older snapshots used the cache key itself.
    "heroSlides": CACHE_KEY_SLIDES,
}

UNKNOWN_CATEGORY_NAME = "Unknown category"

# Firestore list pagination.
LIST_PAGE_SIZE = 300
