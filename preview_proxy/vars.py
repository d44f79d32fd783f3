import os

SERVICE_NAME = os.getenv("SERVICE_NAME", "site-preview-proxy")
API_BASE_PATH = os.environ.get("API_BASE_PATH", "/api").rstrip("/")

# Outbound fetch settings
PROXY_TIMEOUT = float(os.environ.get("PROXY_TIMEOUT", "30"))
PROXY_USER_AGENT = os.environ.get(
    "PROXY_USER_AGENT",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
)
PROXY_FOLLOW_REDIRECTS = (
    os.environ.get("PROXY_FOLLOW_REDIRECTS", "true").lower() == "true"
)

OTLP_ENDPOINT = os.getenv("OTLP_ENDPOINT")
OTLP_HEADERS = os.getenv("OTLP_HEADERS", "")
