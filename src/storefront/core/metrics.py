from prometheus_client import Counter, Histogram

CATALOG_FETCH_COUNT = Counter(
    "catalog_fetch_total",
    "Total number of remote catalog fetches",
    ["status"],
)

CATALOG_FETCH_DURATION = Histogram(
    "catalog_fetch_duration_seconds",
    "Duration of remote catalog fetches in seconds",
)

CART_WRITES = Counter(
    "cart_writes_total",
    "Total number of durable cart writes",
    ["status"],
)

SEARCH_SETTLEMENTS = Counter("search_settlements_total", "Total number of settled search queries")
