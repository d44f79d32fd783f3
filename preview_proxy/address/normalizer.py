"""
Address bar normalization.

Turns whatever the user typed into an absolute ``http``/``https`` URL, or
raises. The forwarding endpoint runs this on every request and never trusts a
caller that claims to have validated the address already.
"""

import ipaddress
import re
from urllib.parse import quote, urlsplit, urlunsplit

DEFAULT_SCHEME = "https"
ALLOWED_SCHEMES = ("http", "https")
DEFAULT_PORTS = {"http": 80, "https": 443}

# RFC 3986 scheme followed by ":"
_SCHEME_PREFIX = re.compile(r"^([a-zA-Z][a-zA-Z0-9+.-]*):")
# "localhost:8080" or "example.com:8443/path" look like a scheme but are host:port
_HOST_PORT = re.compile(r"^[^:/?#@]+:\d+(?:[/?#]|$)")
_FORBIDDEN_HOST_CHARS = re.compile(r"[\s\x00-\x1f\x7f<>\"\\^`{|}%]")

# Characters kept as-is when percent-encoding path and query
_PATH_SAFE = "/%:@!$&'()*+,;=-._~"
_QUERY_SAFE = _PATH_SAFE + "?"


class AddressError(ValueError):
    """Base class for addresses that cannot be forwarded."""


class InvalidUrl(AddressError):
    def __init__(self, raw, reason: str = ""):
        self.raw = raw
        self.reason = reason
        message = f"Invalid URL: {raw!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class UnsupportedScheme(AddressError):
    def __init__(self, scheme: str):
        self.scheme = scheme
        super().__init__(f"Unsupported URL scheme: {scheme}")


def has_scheme_prefix(value: str) -> bool:
    """Return True if ``value`` starts with an explicit URL scheme."""
    if not _SCHEME_PREFIX.match(value):
        return False
    return not _HOST_PORT.match(value)


def _canonical_host(hostname: str, raw: str) -> str:
    if ":" in hostname:
        try:
            ipaddress.IPv6Address(hostname)
        except ValueError:
            raise InvalidUrl(raw, "malformed IPv6 host")
        return f"[{hostname}]"
    if _FORBIDDEN_HOST_CHARS.search(hostname):
        raise InvalidUrl(raw, "forbidden character in host")
    try:
        return hostname.encode("idna").decode("ascii")
    except UnicodeError:
        raise InvalidUrl(raw, "host cannot be encoded")


def _port_suffix(scheme: str, port) -> str:
    if port is None or DEFAULT_PORTS.get(scheme) == port:
        return ""
    return f":{port}"


def normalize_address(raw: str) -> str:
    """
    Normalize a user supplied address into a canonical absolute URL.

    Args:
        raw: The address as typed, e.g. ``example.com`` or ``http://host/x``

    Returns:
        The canonical URL string, e.g. ``https://example.com/``

    Raises:
        InvalidUrl: if the address cannot be parsed into a URL with a host
        UnsupportedScheme: if the scheme is anything but http or https
    """
    if not isinstance(raw, str) or not raw.strip():
        raise InvalidUrl(raw, "empty address")

    candidate = raw.strip()
    if not has_scheme_prefix(candidate):
        candidate = f"{DEFAULT_SCHEME}://{candidate}"

    try:
        parts = urlsplit(candidate)
    except ValueError as e:
        raise InvalidUrl(raw, str(e))

    scheme = parts.scheme.lower()
    if scheme not in ALLOWED_SCHEMES:
        raise UnsupportedScheme(scheme)

    if not parts.hostname:
        raise InvalidUrl(raw, "missing host")
    try:
        port = parts.port
    except ValueError:
        raise InvalidUrl(raw, "invalid port")

    host = _canonical_host(parts.hostname, raw)

    userinfo = ""
    if parts.username is not None:
        userinfo = parts.username
        if parts.password is not None:
            userinfo = f"{userinfo}:{parts.password}"
        userinfo = f"{userinfo}@"

    netloc = f"{userinfo}{host}{_port_suffix(scheme, port)}"
    path = quote(parts.path, safe=_PATH_SAFE) or "/"
    query = quote(parts.query, safe=_QUERY_SAFE)

    return urlunsplit((scheme, netloc, path, query, parts.fragment))


def origin_of(url: str) -> str:
    """Scheme, host and non-default port of an absolute URL."""
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    if not parts.hostname:
        raise InvalidUrl(url, "missing host")
    host = parts.hostname
    if ":" in host:
        host = f"[{host}]"
    return f"{scheme}://{host}{_port_suffix(scheme, parts.port)}"


def is_valid_address(raw: str) -> bool:
    """Optimistic check used before submitting an address."""
    try:
        normalize_address(raw)
    except AddressError:
        return False
    return True
