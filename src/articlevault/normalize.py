"""URL validation and normalization.

Validation is the SSRF guard: it runs before anything is fetched and rejects
URLs that point at the local machine or a private network. Normalization
produces the canonical form stored in the ``url`` header field and used as
the duplicate key.
"""

import ipaddress
import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import unquote_plus, urlsplit, urlunsplit

from .exceptions import ValidationError


@dataclass(frozen=True)
class UrlPolicy:
    """Immutable rule set shared by the validator and the normalizer."""

    blocked_hosts: frozenset = frozenset({
        "localhost",
        "localhost.localdomain",
        "ip6-localhost",
        "ip6-loopback",
        "0.0.0.0",
        "127.0.0.1",
        "::",
        "::1",
    })
    blocked_suffixes: tuple = (".local", ".internal", ".localhost", ".arpa")
    tracking_params: frozenset = frozenset({
        "utm_source", "utm_medium", "utm_campaign", "utm_term", "utm_content",
        "ref", "source", "smid", "fbclid", "gclid", "mc_cid", "mc_eid",
        "ocid", "icid", "ncid", "sr_share", "_hsenc", "_hsmi",
    })
    tracking_prefixes: tuple = ("utm_",)
    allowed_schemes: tuple = ("http", "https")

    def is_tracking_param(self, key: str) -> bool:
        return key in self.tracking_params or key.startswith(self.tracking_prefixes)


DEFAULT_POLICY = UrlPolicy()

_DEFAULT_PORTS = {"http": 80, "https": 443}

# Labels that only make sense as pieces of an IPv4 address: decimal, octal
# (leading zero) or hex. Browsers and many HTTP stacks still resolve these.
_NUMERIC_LABEL = re.compile(r"(0x[0-9a-f]*|[0-9]+)")
_HOST_CHARS = re.compile(r"[\w.-]+")
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
# Parsers disagree on where an authority with these characters ends.
_AMBIGUOUS_NETLOC = re.compile(r"[\\\s]")


def validate_url(raw_url: str, policy: UrlPolicy = DEFAULT_POLICY) -> str:
    """Check that a URL is well formed and safe to fetch.

    Returns the lowercased host on success.

    Raises:
        ValidationError: with a short reason when the URL is rejected.
    """
    if not isinstance(raw_url, str) or not raw_url.strip():
        raise ValidationError("URL is empty")

    # urlsplit silently drops tabs and newlines, so look before parsing.
    stripped = raw_url.strip()
    if _CONTROL_CHARS.search(stripped):
        raise ValidationError("Malformed URL: control character")

    try:
        parts = urlsplit(stripped)
        host = parts.hostname
        parts.port  # raises ValueError on a malformed port
    except ValueError as e:
        raise ValidationError(f"Malformed URL: {e}") from e

    if parts.scheme.lower() not in policy.allowed_schemes:
        raise ValidationError(f"Unsupported scheme: {parts.scheme or '(none)'}")
    if _AMBIGUOUS_NETLOC.search(parts.netloc):
        raise ValidationError(f"Malformed host: {parts.netloc}")
    if not host:
        raise ValidationError("URL has no host")

    host = host.rstrip(".")
    if not host:
        raise ValidationError("URL has no host")
    if host in policy.blocked_hosts:
        raise ValidationError(f"Blocked host: {host}")
    if host.endswith(policy.blocked_suffixes):
        raise ValidationError(f"Reserved hostname: {host}")

    if _check_ip_host(host):
        return host

    if not _HOST_CHARS.fullmatch(host) or ".." in host or host.startswith("."):
        raise ValidationError(f"Malformed host: {host}")

    return host


def _check_ip_host(host: str) -> bool:
    """Reject private IP literals and numeric obfuscations of them.

    Returns True when host is a public IP literal, False for a name.
    """
    try:
        ip = ipaddress.ip_address(host)
    except ValueError:
        ip = None

    if ip is not None:
        mapped = getattr(ip, "ipv4_mapped", None)
        if mapped is not None:
            ip = mapped
        if not ip.is_global or ip.is_multicast:
            raise ValidationError(f"Private or reserved address: {host}")
        return True

    # Anything made only of numeric/hex labels that is not a canonical
    # dotted quad is an obfuscated IP (2130706433, 0x7f.1, 0177.0.0.1).
    labels = host.split(".")
    if all(_NUMERIC_LABEL.fullmatch(label) for label in labels):
        raise ValidationError(f"Obfuscated IP address: {host}")
    return False


def is_valid_url(raw_url: str, policy: UrlPolicy = DEFAULT_POLICY) -> bool:
    """Return True if the URL passes validation."""
    try:
        validate_url(raw_url, policy)
    except ValidationError:
        return False
    return True


def fetch_target(raw_url: str, policy: UrlPolicy = DEFAULT_POLICY) -> str:
    """Validate a URL and return the form that should be fetched.

    The result is rebuilt from the parsed parts that passed validation, so
    the fetcher sees the same host the check did.

    Raises:
        ValidationError: when the URL is rejected.
    """
    validate_url(raw_url, policy)
    parts = urlsplit(raw_url.strip())
    return urlunsplit((parts.scheme.lower(), parts.netloc, parts.path, parts.query, parts.fragment))


def _strip_www(host: str) -> str:
    while host.startswith("www.") and len(host) > 4:
        host = host[4:]
    return host


def normalize_url(raw_url: str, policy: UrlPolicy = DEFAULT_POLICY) -> Optional[str]:
    """Return the canonical form of a URL, or None if it cannot be parsed.

    https scheme, lowercase host without ``www.``, tracking parameters and
    fragment removed, no trailing slash except for the root path. Applying
    it twice gives the same result as applying it once.
    """
    if not isinstance(raw_url, str):
        return None
    try:
        parts = urlsplit(raw_url.strip())
        host = parts.hostname
        port = parts.port
    except ValueError:
        return None
    if not parts.scheme or not host:
        return None

    host = _strip_www(host.lower())
    if ":" in host:
        host = f"[{host}]"

    scheme = parts.scheme.lower()
    if port is not None and port not in (_DEFAULT_PORTS.get(scheme), 443):
        host = f"{host}:{port}"

    userinfo = parts.netloc.rpartition("@")[0] if "@" in parts.netloc else ""
    netloc = f"{userinfo}@{host}" if userinfo else host

    path = parts.path.rstrip("/") or "/"

    kept = []
    for pair in parts.query.split("&"):
        if not pair:
            continue
        key = unquote_plus(pair.split("=", 1)[0])
        if policy.is_tracking_param(key):
            continue
        kept.append(pair)
    query = "&".join(kept)

    return urlunsplit(("https", netloc, path, query, ""))


def extract_domain(url: str) -> Optional[str]:
    """Return the host of a URL without ``www.``, lowercased.

    For display and fallback naming only; not a security check.
    """
    try:
        host = urlsplit(url).hostname
    except (ValueError, TypeError, AttributeError):
        return None
    if not host:
        return None
    return _strip_www(host.lower())
