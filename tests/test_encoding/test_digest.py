"""Tests for packed encoding and attestation digests.

The packed layout is checked byte-for-byte against a hand-written preimage,
and keccak256 against published Keccak-256 answers.
"""

import pytest

from pricefeed.encoding.digest import (
    DIGEST_LAYOUT_VERSION,
    asset_pair_hash,
    build_digest,
    build_mint_digest,
    encode_address,
    encode_uint256,
    keccak256,
    pack_attestation,
    pack_mint_authorization,
)
from pricefeed.encoding.fixed_point import FixedPointValue

PRICE = FixedPointValue("3421570000000000000000", 18)
TIMESTAMP = 1_700_000_000_000
ASSET_PAIR = "MORPHER:ETH_USD"

# 18 and 1700000000000 (0x18bcfe56800) as uint256 words.
DECIMALS_WORD = "00" * 31 + "12"
TIMESTAMP_WORD = "00" * 26 + "018bcfe56800"


class TestKeccak256:
    """Known-answer tests: Ethereum Keccak-256 differs from NIST SHA3-256."""

    def test_empty_input(self) -> None:
        assert keccak256(b"").hex() == (
            "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"
        )

    def test_abc(self) -> None:
        assert keccak256(b"abc").hex() == (
            "4e03657aea45a94fc7d47ba826c8d667c0d1e6e33a64a036ec44f58fa12d6c45"
        )

    def test_erc20_transfer_event_topic(self) -> None:
        assert keccak256(b"Transfer(address,address,uint256)").hex() == (
            "ddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"
        )


class TestEncodeUint256:
    def test_width_and_order(self) -> None:
        assert encode_uint256(18).hex() == DECIMALS_WORD
        assert encode_uint256(TIMESTAMP).hex() == TIMESTAMP_WORD

    def test_max_value(self) -> None:
        assert encode_uint256(2**256 - 1) == b"\xff" * 32

    @pytest.mark.parametrize("value", [-1, 2**256])
    def test_out_of_range(self, value: int) -> None:
        with pytest.raises(ValueError):
            encode_uint256(value)

    def test_rejects_bool(self) -> None:
        with pytest.raises(ValueError):
            encode_uint256(True)  # type: ignore[arg-type]


class TestPackAttestation:
    """Tests for the layout version 1 preimage."""

    def test_layout_version(self) -> None:
        assert DIGEST_LAYOUT_VERSION == 1

    def test_known_preimage(self) -> None:
        expected = (
            b"3421570000000000000000".hex()
            + DECIMALS_WORD
            + TIMESTAMP_WORD
            + keccak256(b"MORPHER:ETH_USD").hex()
        )
        assert pack_attestation(PRICE, TIMESTAMP, ASSET_PAIR).hex() == expected

    def test_field_widths(self) -> None:
        packed = pack_attestation(PRICE, TIMESTAMP, ASSET_PAIR)
        assert len(packed) == len("3421570000000000000000") + 32 + 32 + 32

    def test_asset_pair_hash_is_utf8_keccak(self) -> None:
        assert asset_pair_hash("MORPHER:ETH_USD") == keccak256("MORPHER:ETH_USD".encode("utf-8"))
        assert len(asset_pair_hash("MORPHER:ETH_USD")) == 32


class TestBuildDigest:
    """Tests for build_digest."""

    def test_known_answer(self) -> None:
        # Computed with an independent Keccak-256 implementation.
        assert asset_pair_hash(ASSET_PAIR).hex() == (
            "267fb830456e0b64582e3058e563e93c21b337432aecaf19f4b3dee7d6faa078"
        )
        assert build_digest(PRICE, TIMESTAMP, ASSET_PAIR).hex() == (
            "816ec9e99d0c0881570a098f7555f8979b5d006d81fb3fe4de34aae7e0414199"
        )

    def test_is_keccak_of_preimage(self) -> None:
        digest = build_digest(PRICE, TIMESTAMP, ASSET_PAIR)
        assert digest == keccak256(pack_attestation(PRICE, TIMESTAMP, ASSET_PAIR))
        assert len(digest) == 32

    def test_deterministic(self) -> None:
        first = build_digest(PRICE, TIMESTAMP, ASSET_PAIR)
        second = build_digest(FixedPointValue("3421570000000000000000", 18), TIMESTAMP, ASSET_PAIR)
        assert first == second

    def test_every_field_changes_digest(self) -> None:
        base = build_digest(PRICE, TIMESTAMP, ASSET_PAIR)
        assert build_digest(FixedPointValue("3421570000000000000001", 18), TIMESTAMP, ASSET_PAIR) != base
        assert build_digest(FixedPointValue("3421570000000000000000", 17), TIMESTAMP, ASSET_PAIR) != base
        assert build_digest(PRICE, TIMESTAMP + 1, ASSET_PAIR) != base
        assert build_digest(PRICE, TIMESTAMP, "MORPHER:BTC_USD") != base

    def test_negative_timestamp_rejected(self) -> None:
        with pytest.raises(ValueError):
            build_digest(PRICE, -1, ASSET_PAIR)


class TestMintEncoding:
    """Tests for the mint authorization preimage."""

    ADDRESS = "0x2c7536E3605D9C16a7a3D7b1898e529396a65c23"

    def test_known_preimage(self) -> None:
        packed = pack_mint_authorization(self.ADDRESS, 1000, 1_700_000_000)
        assert packed.hex() == (
            "2c7536e3605d9c16a7a3d7b1898e529396a65c23"
            + "00" * 30 + "03e8"
            + "00" * 28 + "6553f100"
        )
        assert len(packed) == 20 + 32 + 32

    def test_mint_digest(self) -> None:
        assert build_mint_digest(self.ADDRESS, 1000, 1) == keccak256(
            pack_mint_authorization(self.ADDRESS, 1000, 1)
        )

    @pytest.mark.parametrize(
        "address",
        ["2c7536e3605d9c16a7a3d7b1898e529396a65c23", "0x1234", "0xzz7536e3605d9c16a7a3d7b1898e529396a65c23"],
    )
    def test_bad_address(self, address: str) -> None:
        with pytest.raises(ValueError):
            encode_address(address)
