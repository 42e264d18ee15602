"""
Единый экземпляр FastMCP для всего сервера.
"""
from fastmcp import FastMCP
from prometheus_client import Counter, Histogram

# Создаем единый экземпляр FastMCP
mcp = FastMCP("Mistica Design System Server")

# Prometheus метрики
TOOL_CALLS_TOTAL = Counter(
    "tool_calls_total",
    "Total number of tool calls",
    ["tool_name", "status"]
)

TOOL_CALL_DURATION = Histogram(
    "tool_call_duration_seconds",
    "Duration of tool calls",
    ["tool_name"],
    buckets=[0.1, 0.5, 1.0, 2.0, 5.0, 10.0]
)

CATALOG_REQUESTS = Counter(
    "catalog_requests_total",
    "Total number of catalog source requests",
    ["source", "status"]
)

CATALOG_CACHE_EVENTS = Counter(
    "catalog_cache_events_total",
    "Catalog cache hits and misses",
    ["event"]
)
