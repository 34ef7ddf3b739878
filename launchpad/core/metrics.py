from prometheus_client import Counter, Histogram, Gauge, Info

# app info
app_info = Info("launchpad_app_info", "Application information")
app_info.info({"app": "launchpad_api", "version": "1.0.0"})

# http request metrics
http_requests_total = Counter(
    "launchpad_http_requests_total",
    "Total HTTP requests count",
    ["method", "endpoint", "status_code"],
)

http_request_duration = Histogram(
    "launchpad_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
)

active_requests = Gauge("launchpad_active_requests", "Number of active HTTP requests")

# upstream metrics
upstream_fetch_operations = Counter(
    "launchpad_upstream_fetch_operations_total",
    "Upstream launch API fetch operations",
    ["operation", "status"],
)

upstream_fetch_duration = Histogram(
    "launchpad_upstream_fetch_duration_seconds",
    "Upstream launch API fetch duration in seconds",
    ["operation"],
)

# cache metrics
cache_hits = Counter("launchpad_cache_hits_total", "Cache hits", ["cache_type"])

cache_misses = Counter("launchpad_cache_misses_total", "Cache misses", ["cache_type"])

# pagination metrics
pages_served = Counter(
    "launchpad_pages_served_total", "Pages served", ["first_page", "has_more"]
)

unmatched_cursors = Counter(
    "launchpad_unmatched_cursors_total",
    "Pagination requests whose cursor matched no item",
)
