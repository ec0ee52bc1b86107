import os
import logging
from fastapi import Request

logger = logging.getLogger(__name__)

def get_base_url(request_info: Request) -> str:
    """
    Get the base URL stored uploads are served under.

    The scheme is forced to https when the app runs behind a TLS terminating
    proxy: either FLY_APP_NAME is set or the proxy sent X-Forwarded-Proto: https.

    Args:
        request_info: The FastAPI request object

    Returns:
        The base URL, always ending with "/"
    """
    base_url = str(request_info.base_url)

    forwarded_proto = request_info.headers.get("x-forwarded-proto", "")
    if os.getenv("FLY_APP_NAME") or forwarded_proto.lower() == "https":
        if base_url.startswith("http:"):
            base_url = "https:" + base_url[5:]
            logger.debug(f"Behind TLS proxy, forcing HTTPS. Base URL: {base_url}")

    if not base_url.endswith("/"):
        base_url += "/"
    return base_url
