import pytest

from prommodel.labels import (
    LABEL_NAME_RE,
    METRIC_NAME_LABEL,
    LabelName,
    LabelPair,
    LabelValue,
    MetricType,
    format_label_names,
    validate_label_name,
)
from prommodel.names import ValidationScheme, use_validation_scheme


def _invalid_utf8(raw: bytes) -> str:
    return raw.decode("utf-8", "surrogateescape")


@pytest.mark.parametrize(
    "given, expected",
    [
        (["ZZZ", "zzz"], ["ZZZ", "zzz"]),
        (["aaa", "AAA"], ["AAA", "aaa"]),
    ],
)
def test_label_names_sort(given, expected):
    result = sorted(LabelName(n) for n in given)
    assert result == expected


@pytest.mark.parametrize(
    "given, expected",
    [
        (["ZZZ", "zzz"], ["ZZZ", "zzz"]),
        (["aaa", "AAA"], ["AAA", "aaa"]),
    ],
)
def test_label_values_sort(given, expected):
    result = sorted(LabelValue(v) for v in given)
    assert result == expected


@pytest.mark.parametrize(
    "name, legacy_valid, utf8_valid",
    [
        ("Avalid_23name", True, True),
        ("_Avalid_23name", True, True),
        ("1valid_23name", False, True),
        ("avalid_23name", True, True),
        ("Ava:lid_23name", False, True),
        ("a lid_23name", False, True),
        (":leading_colon", False, True),
        ("colon:in:the:middle", False, True),
        (_invalid_utf8(b"a\xc5z"), False, False),
    ],
)
def test_label_name_is_valid(name, legacy_valid, utf8_valid):
    ln = LabelName(name)
    with use_validation_scheme(ValidationScheme.LEGACY):
        assert ln.is_valid() is legacy_valid
        assert (LABEL_NAME_RE.fullmatch(name) is not None) is legacy_valid
    with use_validation_scheme(ValidationScheme.UTF8):
        assert ln.is_valid() is utf8_valid
    assert ln.is_valid_legacy() is legacy_valid


def test_empty_label_name_is_invalid():
    with use_validation_scheme(ValidationScheme.UTF8):
        assert LabelName("").is_valid() is False
    assert LabelName("").is_valid_legacy() is False


def test_label_value_is_valid():
    assert LabelValue("台北").is_valid() is True
    assert LabelValue(_invalid_utf8(b"\xfflabel")).is_valid() is False


def test_sort_label_pairs():
    pairs = [
        LabelPair(LabelName("FooName"), LabelValue("FooValue")),
        LabelPair(LabelName("FooName"), LabelValue("BarValue")),
        LabelPair(LabelName("BarName"), LabelValue("FooValue")),
        LabelPair(LabelName("BazName"), LabelValue("BazValue")),
        LabelPair(LabelName("BarName"), LabelValue("FooValue")),
        LabelPair(LabelName("BazName"), LabelValue("FazValue")),
    ]
    expected = [
        ("BarName", "FooValue"),
        ("BarName", "FooValue"),
        ("BazName", "BazValue"),
        ("BazName", "FazValue"),
        ("FooName", "BarValue"),
    ]
    result = sorted(pairs)
    assert [(p.name, p.value) for p in result[: len(expected)]] == expected
    assert (result[-1].name, result[-1].value) == ("FooName", "FooValue")


def test_validate_label_name_accepts_valid():
    with use_validation_scheme(ValidationScheme.LEGACY):
        assert validate_label_name("foo_bar") == LabelName("foo_bar")


def test_validate_label_name_rejects_invalid_legacy():
    with use_validation_scheme(ValidationScheme.LEGACY):
        with pytest.raises(ValueError) as excinfo:
            validate_label_name("1nvalid_23name")
    assert str(excinfo.value) == '"1nvalid_23name" is not a valid label name'


def test_validate_label_name_utf8_allows_dots():
    with use_validation_scheme(ValidationScheme.UTF8):
        assert validate_label_name("some.label") == "some.label"
        with pytest.raises(ValueError):
            validate_label_name("")


def test_format_label_names():
    assert format_label_names([LabelName("a"), LabelName("b"), LabelName("c")]) == "a, b, c"
    assert format_label_names([]) == ""


def test_metric_type_values():
    assert MetricType("gaugehistogram") is MetricType.GAUGE_HISTOGRAM
    assert str(MetricType.COUNTER) == "counter"
    with pytest.raises(ValueError):
        MetricType("bogus")


def test_metric_name_label_constant_is_reserved():
    assert METRIC_NAME_LABEL.startswith("__")
    with use_validation_scheme(ValidationScheme.LEGACY):
        assert LabelName(METRIC_NAME_LABEL).is_valid() is True