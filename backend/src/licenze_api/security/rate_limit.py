"""Rate limiting for operational endpoints."""

from ipaddress import ip_address, ip_network

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from licenze_api.config import get_settings

# Runs and backfills touch every license; keep them rare
OPS_WRITE_LIMIT = "5/minute"
OPS_READ_LIMIT = "30/minute"


def _is_trusted_proxy(client_ip: str, trusted_proxies: list[str]) -> bool:
    """Check if client IP belongs to one of the trusted proxy IPs/ranges."""
    try:
        addr = ip_address(client_ip)
    except ValueError:
        return False

    for proxy in trusted_proxies:
        try:
            if "/" in proxy:
                if addr in ip_network(proxy, strict=False):
                    return True
            elif addr == ip_address(proxy):
                return True
        except ValueError:
            continue
    return False


def get_real_client_ip(request: Request) -> str:
    """Client IP, trusting X-Forwarded-For only from configured proxies."""
    direct_ip = get_remote_address(request)
    trusted = get_settings().trusted_proxies_list

    if trusted and _is_trusted_proxy(direct_ip, trusted):
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()

    return direct_ip


limiter = Limiter(key_func=get_real_client_ip)
