"""Top-level package for the address finder."""

from .extractor import AddressExtractor, extract_addresses, looks_like_address
from .normalization import normalize_address

__all__ = [
    "AddressExtractor",
    "extract_addresses",
    "looks_like_address",
    "normalize_address",
]
