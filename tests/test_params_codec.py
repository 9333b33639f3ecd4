from __future__ import annotations

import pytest

from vetogov.core.errors import MalformedParameters
from vetogov.core.params import abi
from vetogov.core.params.codec import decode_installation_params, encode_installation_params, parameters_fingerprint

from .helpers.builders import ALICE, BOB, FIXTURE_TOKEN, external_token, mint, new_token, text_word, voting, word, words

GOLDEN_WORDS = [
    # VotingSettings, inline
    word("0186a0"),  # minVetoRatio = 100000
    word("069780"),  # minDuration = 432000
    word("00"),  # minProposerVotingPower = 0
    # offsets of the dynamic tuples
    word("a0"),  # TokenSettings at 160
    word("0180"),  # MintSettings at 384
    # TokenSettings
    word(FIXTURE_TOKEN[2:]),
    word("60"),  # name at +96
    word("a0"),  # symbol at +160
    word("0d"),
    text_word("5772617070656420546f6b656e"),  # "Wrapped Token"
    word("03"),
    text_word("77544b"),  # "wTK"
    # MintSettings
    word("40"),  # receivers at +64
    word("60"),  # amounts at +96
    word("00"),
    word("00"),
]
GOLDEN = bytes.fromhex("".join(GOLDEN_WORDS))


def _golden_encode(**overrides):
    v = overrides.pop("voting", voting())
    t = overrides.pop("token", external_token())
    m = overrides.pop("mint", mint())
    return encode_installation_params(v, t, m)


def _patch_word(data: bytes, index: int, value: bytes) -> bytes:
    out = bytearray(data)
    out[index * 32 : (index + 1) * 32] = value.rjust(32, b"\x00")
    return bytes(out)


def test_golden_fixture_bytes():
    enc = _golden_encode()
    assert len(enc) == 16 * 32
    assert words(enc) == GOLDEN_WORDS
    assert enc == GOLDEN


def test_golden_fixture_decodes_back():
    params = decode_installation_params(GOLDEN)
    v, t, m = params.as_tuple()
    assert v.min_veto_ratio == 100_000
    assert v.min_duration == 432_000
    assert v.min_proposer_voting_power == 0
    assert t.addr == FIXTURE_TOKEN
    assert t.name == "Wrapped Token"
    assert t.symbol == "wTK"
    assert m.receivers == [] and m.amounts == []


@pytest.mark.parametrize(
    "overrides, changed_word",
    [
        ({"voting": voting(min_veto_ratio=250_000)}, 0),
        ({"voting": voting(min_duration=86_400)}, 1),
        ({"voting": voting(min_proposer_voting_power=10**18)}, 2),
        ({"token": external_token(addr=ALICE)}, 5),
        ({"token": external_token(name="Wrapped Tokez")}, 9),
        ({"token": external_token(symbol="wTX")}, 11),
    ],
)
def test_single_field_change_touches_only_its_region(overrides, changed_word):
    changed = words(_golden_encode(**overrides))
    assert len(changed) == len(GOLDEN_WORDS)
    diff = [i for i, (a, b) in enumerate(zip(GOLDEN_WORDS, changed)) if a != b]
    assert diff == [changed_word]


def test_mint_settings_layout():
    enc = encode_installation_params(voting(), new_token("Veto Token", "VETO"), mint([ALICE, BOB], [2000, 5000]))
    w = words(enc)
    assert w[3] == word("a0")
    # token tuple: zero addr, "Veto Token" and "VETO" each take 2 words -> 7 words -> mint at 160 + 224
    assert w[4] == word("0180")
    assert w[5] == word("00")
    mint_words = w[12:]
    assert mint_words == [
        word("40"),
        word("a0"),  # receivers: length + 2 items = 96 bytes after the 64-byte head
        word("02"),
        word(ALICE[2:]),
        word(BOB[2:]),
        word("02"),
        word("07d0"),
        word("1388"),
    ]


@pytest.mark.parametrize(
    "v, t, m",
    [
        (voting(), external_token(), mint()),
        (voting(0, 0, 0), new_token("", ""), mint()),
        (voting(2**32 - 1, 2**64 - 1, 2**256 - 1), new_token("Ünïcødé ✓", "UNI"), mint([ALICE, ALICE, BOB], [1, 2, 2**256 - 1])),
        (voting(), new_token("x" * 32, "y" * 33), mint([BOB], [0])),
    ],
)
def test_round_trip(v, t, m):
    assert decode_installation_params(encode_installation_params(v, t, m)).as_tuple() == (v, t, m)


def test_trailing_bytes_are_ignored():
    params = decode_installation_params(GOLDEN + b"\x00" * 7)
    assert params.token.symbol == "wTK"


def test_fingerprint_is_stable_and_sensitive():
    assert parameters_fingerprint(GOLDEN) == parameters_fingerprint(bytes(GOLDEN))
    assert parameters_fingerprint(GOLDEN) != parameters_fingerprint(_golden_encode(voting=voting(min_duration=1)))


# ---- malformed buffers ----


@pytest.mark.parametrize("cut", [0, 1, 31, 32 * 5, len(GOLDEN) - 1])
def test_truncated_buffer_rejected(cut):
    with pytest.raises(MalformedParameters):
        decode_installation_params(GOLDEN[:cut])


def test_offset_outside_buffer_rejected():
    bad = _patch_word(GOLDEN, 3, (10_000).to_bytes(32, "big"))
    with pytest.raises(MalformedParameters) as ei:
        decode_installation_params(bad)
    assert ei.value.code == "malformed_parameters"
    assert ei.value.context.get("position") == 3 * 32


def test_huge_offset_rejected():
    bad = _patch_word(GOLDEN, 4, b"\xff" * 32)
    with pytest.raises(MalformedParameters):
        decode_installation_params(bad)


def test_dirty_address_rejected():
    dirty = b"\x01" + bytes.fromhex(word(FIXTURE_TOKEN[2:]))[1:]
    with pytest.raises(MalformedParameters):
        decode_installation_params(_patch_word(GOLDEN, 5, dirty))


def test_ratio_wider_than_uint32_rejected():
    with pytest.raises(MalformedParameters):
        decode_installation_params(_patch_word(GOLDEN, 0, (2**32).to_bytes(5, "big")))


def test_string_length_past_end_rejected():
    with pytest.raises(MalformedParameters):
        decode_installation_params(_patch_word(GOLDEN, 8, (4096).to_bytes(2, "big")))


def test_invalid_utf8_rejected():
    bad = bytearray(GOLDEN)
    bad[9 * 32] = 0xFF
    with pytest.raises(MalformedParameters):
        decode_installation_params(bytes(bad))


def test_absurd_array_length_rejected():
    with pytest.raises(MalformedParameters):
        decode_installation_params(_patch_word(GOLDEN, 14, (2**200).to_bytes(26, "big")))


def test_mismatched_mint_lengths_rejected_on_decode():
    from vetogov.core.params.codec import INSTALLATION_PARAMS_TYPES

    raw = abi.encode(
        INSTALLATION_PARAMS_TYPES,
        [(1, 2, 3), ("0x" + "00" * 20, "T", "T"), ([ALICE, BOB], [5])],
    )
    with pytest.raises(MalformedParameters):
        decode_installation_params(raw)


def test_non_bytes_input_rejected():
    with pytest.raises(MalformedParameters):
        decode_installation_params("0x00")  # type: ignore[arg-type]
