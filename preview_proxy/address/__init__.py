from .normalizer import (
    AddressError,
    InvalidUrl,
    UnsupportedScheme,
    normalize_address,
    origin_of,
    is_valid_address,
)

__all__ = [
    "AddressError",
    "InvalidUrl",
    "UnsupportedScheme",
    "normalize_address",
    "origin_of",
    "is_valid_address",
]
