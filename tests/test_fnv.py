import pytest

from prommodel.fnv import hash_add, hash_add_byte, hash_new

SEPARATOR = 255


def test_hash_new_is_fnv_offset_basis():
    assert hash_new() == 14695981039346656037


def test_adding_empty_string_keeps_hash():
    h = hash_new()
    assert hash_add(h, "") == h
    assert hash_add(h, b"") == h


def test_hash_add_equals_bytewise_addition():
    h = hash_new()
    by_string = hash_add(h, "ab")
    by_bytes = hash_add_byte(hash_add_byte(h, ord("a")), ord("b"))
    assert by_string == by_bytes


def test_string_and_bytes_hash_identically():
    h = hash_new()
    assert hash_add(h, "garland, briggs") == hash_add(h, b"garland, briggs")
    assert hash_add(h, "花火") == hash_add(h, "花火".encode("utf-8"))


def test_escaped_invalid_bytes_hash_as_raw_bytes():
    h = hash_new()
    assert hash_add(h, "a\udcc5z") == hash_add(h, b"a\xc5z")


def test_hash_is_order_sensitive():
    h = hash_new()
    assert hash_add(hash_add(h, "a"), "b") == hash_add(h, "ab")
    assert hash_add(h, "ab") != hash_add(h, "ba")


def test_hash_stays_within_64_bits():
    h = hash_add(hash_new(), "x" * 1000)
    assert 0 <= h < 2**64


def _pair_signature(pairs):
    h = hash_new()
    for name, value in pairs:
        h = hash_add(h, name)
        h = hash_add_byte(h, SEPARATOR)
        h = hash_add(h, value)
        h = hash_add_byte(h, SEPARATOR)
    return h


def test_signature_composition_matches_known_value():
    pairs = [("fear", "love is not enough"), ("name", "garland, briggs")]
    assert _pair_signature(pairs) == 5799056148416392346


def test_single_label_signature_matches_known_value():
    assert _pair_signature([("first-label", "first-label-value")]) == 5146282821936882169


def test_single_pair_without_trailing_separator():
    h = hash_new()
    h = hash_add(h, "first-label")
    h = hash_add_byte(h, SEPARATOR)
    h = hash_add(h, "first-label-value")
    assert h == 5147259542624943964


@pytest.mark.parametrize("bad", [-1, 256, 1000])
def test_hash_add_byte_rejects_out_of_range(bad):
    with pytest.raises(ValueError):
        hash_add_byte(hash_new(), bad)