"""
Base Model Tests for CreatorShare

Tests for:
- generate_id format and uniqueness
- LedgerModel configuration
- URL, wallet and tag validators
- FORBIDDEN_DICT_KEYS and validate_dict_security
- Response envelopes
"""

import re
import time

import pytest
from pydantic import ValidationError

from creatorshare.models.base import (
    DEFAULT_MAX_DICT_DEPTH,
    DEFAULT_MAX_DICT_KEYS,
    FORBIDDEN_DICT_KEYS,
    ID_SUFFIX_LENGTH,
    ApiResponse,
    LedgerModel,
    PaginatedApiResponse,
    PaginationInfo,
    generate_id,
    validate_dict_security,
    validate_tags,
    validate_url,
    validate_wallet_address,
)

ID_PATTERN = re.compile(r"^(?P<kind>[a-z]+)_(?P<millis>\d+)_(?P<suffix>[0-9a-z]+)$")


# =============================================================================
# generate_id Tests
# =============================================================================


class TestGenerateId:
    """Tests for generate_id function."""

    def test_format(self):
        """Ids are kind, epoch millis and a base36 suffix."""
        match = ID_PATTERN.match(generate_id("content"))

        assert match is not None
        assert match.group("kind") == "content"
        assert len(match.group("suffix")) == ID_SUFFIX_LENGTH

    def test_millis_is_current_time(self):
        before = int(time.time() * 1000)
        millis = int(ID_PATTERN.match(generate_id("remix")).group("millis"))
        after = int(time.time() * 1000)

        assert before <= millis <= after

    def test_kind_prefix_is_preserved(self):
        for kind in ("content", "remix", "enhancement", "tx", "poll", "notification"):
            assert generate_id(kind).startswith(f"{kind}_")

    def test_ids_are_unique(self):
        """Rapid generation in the same millisecond stays collision-free."""
        ids = {generate_id("content") for _ in range(2000)}
        assert len(ids) == 2000


# =============================================================================
# LedgerModel Tests
# =============================================================================


class TestLedgerModel:
    """Tests for LedgerModel base configuration."""

    def test_strips_whitespace(self):
        class Sample(LedgerModel):
            name: str

        assert Sample(name="  padded  ").name == "padded"

    def test_validates_assignment(self):
        class Sample(LedgerModel):
            count: int

        sample = Sample(count=1)
        with pytest.raises(ValidationError):
            sample.count = "not a number"


# =============================================================================
# Validator Tests
# =============================================================================


class TestValidateUrl:
    @pytest.mark.parametrize(
        "url",
        [
            "https://cdn.example.com/a.png",
            "http://localhost:3000/content/x",
            "ipfs://bafybeigdyrzt5sfp7udm7hu76uh7y26nf3efuylqabf3oclgtqy55fbzdi",
            "ar://abc123",
        ],
    )
    def test_accepts_known_schemes(self, url):
        assert validate_url(url) == url

    @pytest.mark.parametrize("url", ["not a url", "ftp://example.com/file", "https://", ""])
    def test_rejects_invalid(self, url):
        with pytest.raises(ValueError, match="Invalid URL"):
            validate_url(url)


class TestValidateWalletAddress:
    def test_accepts_lowercase_hex(self):
        wallet = "0x" + "ab" * 20
        assert validate_wallet_address(wallet) == wallet

    @pytest.mark.parametrize("wallet", ["0x123", "not-a-wallet", "0x" + "g" * 40, ""])
    def test_rejects_malformed(self, wallet):
        with pytest.raises(ValueError, match="Invalid wallet address"):
            validate_wallet_address(wallet)


class TestValidateTags:
    def test_strips_and_deduplicates(self):
        assert validate_tags([" art ", "art", "", "music"]) == ["art", "music"]

    def test_rejects_too_many(self):
        with pytest.raises(ValueError, match="Too many tags"):
            validate_tags([f"tag{i}" for i in range(11)])

    def test_ten_tags_allowed(self):
        assert len(validate_tags([f"tag{i}" for i in range(10)])) == 10

    def test_rejects_long_tag(self):
        with pytest.raises(ValueError, match="Tag too long"):
            validate_tags(["x" * 21])


class TestValidateDictSecurity:
    """Tests for validate_dict_security function."""

    def test_accepts_plain_metadata(self):
        value = {"source": "frame", "nested": {"depth": 1}, "items": [{"a": 1}]}
        assert validate_dict_security(value) == value

    @pytest.mark.parametrize("key", sorted(FORBIDDEN_DICT_KEYS))
    def test_rejects_forbidden_keys(self, key):
        with pytest.raises(ValueError, match="Forbidden keys"):
            validate_dict_security({key: "x"})

    def test_rejects_forbidden_keys_in_nested_lists(self):
        with pytest.raises(ValueError, match="Forbidden keys"):
            validate_dict_security({"items": [{"__proto__": {}}]})

    def test_rejects_deep_nesting(self):
        value: dict = {}
        cursor = value
        for _ in range(DEFAULT_MAX_DICT_DEPTH + 2):
            cursor["next"] = {}
            cursor = cursor["next"]

        with pytest.raises(ValueError, match="nesting too deep"):
            validate_dict_security(value)

    def test_rejects_too_many_keys(self):
        with pytest.raises(ValueError, match="Too many keys"):
            validate_dict_security({f"k{i}": i for i in range(DEFAULT_MAX_DICT_KEYS + 1)})

    def test_rejects_oversized_payload(self):
        with pytest.raises(ValueError, match="too large"):
            validate_dict_security({"blob": "x" * 20000})


# =============================================================================
# Response Envelope Tests
# =============================================================================


class TestResponseEnvelopes:
    def test_api_response_defaults(self):
        response = ApiResponse()
        assert response.success is True
        assert response.data is None
        assert response.error is None

    def test_paginated_response_shape(self):
        response = PaginatedApiResponse(
            data=[1, 2],
            pagination=PaginationInfo(page=1, limit=2, total=5, total_pages=3),
        )
        dumped = response.model_dump()

        assert dumped["pagination"] == {"page": 1, "limit": 2, "total": 5, "total_pages": 3}
        assert dumped["data"] == [1, 2]
