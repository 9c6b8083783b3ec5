import pytest

from prommodel.fingerprinting import (
    Fingerprint,
    FingerprintSet,
    fingerprint_from_string,
    parse_fingerprint,
)


def test_fingerprint_from_string():
    assert fingerprint_from_string("4294967295") == Fingerprint(285960729237)


def test_parse_fingerprint():
    assert parse_fingerprint("4294967295") == Fingerprint(285960729237)


def test_fingerprint_string_is_zero_padded_hex():
    assert str(Fingerprint(285960729237)) == "0000004294967295"


def test_fingerprint_string_round_trip():
    fp = Fingerprint(14695981039346656037)
    assert parse_fingerprint(str(fp)) == fp


@pytest.mark.parametrize("bad", ["", "xyz", "0x10", "-1", "1_0", " 10", "1" * 17])
def test_parse_fingerprint_rejects_invalid(bad):
    with pytest.raises(ValueError):
        parse_fingerprint(bad)


def test_fingerprint_from_string_rejects_invalid():
    with pytest.raises(ValueError):
        fingerprint_from_string("not hex")


def test_fingerprint_range_checked():
    with pytest.raises(ValueError):
        Fingerprint(-1)
    with pytest.raises(ValueError):
        Fingerprint(2**64)


def test_fingerprints_sort():
    fingerprints = [
        Fingerprint(14695981039346656037),
        Fingerprint(285960729237),
        Fingerprint(0),
        Fingerprint(4294967295),
        Fingerprint(285960729237),
        Fingerprint(18446744073709551615),
    ]
    expected = [
        0,
        4294967295,
        285960729237,
        285960729237,
        14695981039346656037,
        18446744073709551615,
    ]
    assert sorted(fingerprints) == expected


def test_fingerprint_set_unequal_length():
    f = FingerprintSet([14695981039346656037, 0, 4294967295, 285960729237, 18446744073709551615])
    f2 = FingerprintSet([285960729237])
    assert not f.equal(f2)


def test_fingerprint_set_unequal_content():
    f = FingerprintSet([14695981039346656037, 0, 4294967295])
    f2 = FingerprintSet([14695981039346656037, 0, 285960729237])
    assert not f.equal(f2)


def test_fingerprint_set_equal_content():
    f = FingerprintSet([14695981039346656037, 0, 4294967295])
    f2 = FingerprintSet([14695981039346656037, 0, 4294967295])
    assert f.equal(f2)


@pytest.mark.parametrize(
    "input1,input2,expected",
    [
        ([], [], []),
        ([0], [], []),
        (
            [14695981039346656037, 0, 4294967295],
            [14695981039346656037, 0, 4294967295],
            [14695981039346656037, 0, 4294967295],
        ),
        (
            [14695981039346656037, 0, 285960729237],
            [14695981039346656037, 0, 4294967295],
            [14695981039346656037, 0],
        ),
        (
            [14695981039346656037, 0, 285960729237],
            [14695981039346656037, 0],
            [14695981039346656037, 0],
        ),
    ],
)
def test_fingerprint_intersection(input1, input2, expected):
    actual = FingerprintSet(input1).intersection(FingerprintSet(input2))
    assert isinstance(actual, FingerprintSet)
    assert actual.equal(FingerprintSet(expected))


def test_intersection_is_symmetric():
    a = FingerprintSet([1, 2, 3, 4])
    b = FingerprintSet([3, 4, 5])
    assert a.intersection(b).equal(b.intersection(a))
    assert a.intersection(b) == {3, 4}