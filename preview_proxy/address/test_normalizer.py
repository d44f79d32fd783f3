import pytest

from preview_proxy.address import (
    AddressError,
    InvalidUrl,
    UnsupportedScheme,
    is_valid_address,
    normalize_address,
    origin_of,
)
from preview_proxy.address.normalizer import has_scheme_prefix


class TestNormalizeAddress:
    """Address bar input to canonical URL."""

    def test_bare_domain_gets_https(self):
        assert normalize_address("example.com") == "https://example.com/"

    def test_bare_domain_with_path_and_query(self):
        assert (
            normalize_address("example.com/docs?page=2#intro")
            == "https://example.com/docs?page=2#intro"
        )

    def test_explicit_http_is_kept(self):
        assert normalize_address("http://example.com/a") == "http://example.com/a"

    def test_scheme_and_host_are_lowercased(self):
        assert normalize_address("HTTPS://Example.COM/Path") == "https://example.com/Path"

    def test_surrounding_whitespace_is_stripped(self):
        assert normalize_address("  example.com  ") == "https://example.com/"

    def test_default_port_is_dropped(self):
        assert normalize_address("https://example.com:443/") == "https://example.com/"
        assert normalize_address("http://example.com:80") == "http://example.com/"

    def test_non_default_port_is_kept(self):
        assert normalize_address("localhost:8080") == "https://localhost:8080/"
        assert (
            normalize_address("example.com:8443/admin")
            == "https://example.com:8443/admin"
        )

    def test_ipv6_host(self):
        assert normalize_address("http://[::1]:8000/x") == "http://[::1]:8000/x"

    def test_internationalized_host_is_idna_encoded(self):
        assert normalize_address("bücher.de") == "https://xn--bcher-kva.de/"

    def test_spaces_in_path_are_percent_encoded(self):
        assert (
            normalize_address("example.com/a b") == "https://example.com/a%20b"
        )

    def test_existing_escapes_are_preserved(self):
        assert (
            normalize_address("https://example.com/a%20b?q=x%2Fy")
            == "https://example.com/a%20b?q=x%2Fy"
        )

    def test_userinfo_is_preserved(self):
        assert (
            normalize_address("https://user:pw@example.com/")
            == "https://user:pw@example.com/"
        )

    @pytest.mark.parametrize(
        "raw",
        ["www.example.org", "example.com/path", "sub.domain.io:9000", "10.0.0.1"],
    )
    def test_prefix_is_added_when_scheme_missing(self, raw):
        assert normalize_address(raw).startswith("https://")


class TestRejectedAddresses:
    """Addresses that must never reach the outbound fetch."""

    @pytest.mark.parametrize(
        "raw,scheme",
        [
            ("javascript:alert(1)", "javascript"),
            ("JavaScript:alert(document.cookie)", "javascript"),
            ("data:text/html,<script>alert(1)</script>", "data"),
            ("file:///etc/passwd", "file"),
            ("ftp://example.com/file.txt", "ftp"),
            ("mailto:someone@example.com", "mailto"),
        ],
    )
    def test_unsupported_schemes(self, raw, scheme):
        with pytest.raises(UnsupportedScheme) as exc_info:
            normalize_address(raw)
        assert exc_info.value.scheme == scheme
        assert scheme in str(exc_info.value)

    @pytest.mark.parametrize(
        "raw",
        [
            "",
            "   ",
            "https://",
            "http:///path-only",
            "https://example.com:99999/",
            "https://example.com:abc/",
            "https://exa mple.com/",
            "https://[not-ipv6/",
        ],
    )
    def test_invalid_urls(self, raw):
        with pytest.raises(InvalidUrl):
            normalize_address(raw)

    def test_non_string_input(self):
        with pytest.raises(InvalidUrl):
            normalize_address(None)

    def test_errors_are_value_errors(self):
        assert issubclass(InvalidUrl, AddressError)
        assert issubclass(UnsupportedScheme, AddressError)
        assert issubclass(AddressError, ValueError)


class TestHelpers:
    def test_has_scheme_prefix(self):
        assert has_scheme_prefix("https://example.com")
        assert has_scheme_prefix("javascript:void(0)")
        assert not has_scheme_prefix("example.com")
        assert not has_scheme_prefix("localhost:3000")
        assert not has_scheme_prefix("localhost:3000/path")

    def test_origin_of(self):
        assert origin_of("https://example.com/a/b?c=d") == "https://example.com"
        assert origin_of("http://Example.com:8080/x") == "http://example.com:8080"
        assert origin_of("https://example.com:443/") == "https://example.com"
        assert origin_of("http://[::1]:8000/") == "http://[::1]:8000"

    def test_origin_of_without_host(self):
        with pytest.raises(InvalidUrl):
            origin_of("/relative/path")

    def test_is_valid_address(self):
        assert is_valid_address("example.com")
        assert is_valid_address("http://localhost:8080")
        assert not is_valid_address("javascript:alert(1)")
        assert not is_valid_address("")
