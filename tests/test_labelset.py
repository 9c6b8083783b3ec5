import pytest

from prommodel.labelset import LabelSet
from prommodel.names import ValidationScheme, use_validation_scheme


def test_from_json_valid():
    data = (
        '{"monitor": "codelab", "foo": "bar", "foo2": "bar", '
        '"abc": "prometheus", "foo11": "bar11"}'
    )
    ls = LabelSet.from_json(data)
    assert ls == {
        "monitor": "codelab",
        "foo": "bar",
        "foo2": "bar",
        "abc": "prometheus",
        "foo11": "bar11",
    }


def test_from_json_invalid_name_legacy():
    data = '{"1nvalid_23name": "codelab", "foo": "bar"}'
    with use_validation_scheme(ValidationScheme.LEGACY):
        with pytest.raises(ValueError) as info:
            LabelSet.from_json(data)
    assert str(info.value) == '"1nvalid_23name" is not a valid label name'


def test_from_json_name_valid_under_utf8():
    with use_validation_scheme(ValidationScheme.UTF8):
        ls = LabelSet.from_json('{"1nvalid_23name": "codelab"}')
    assert ls["1nvalid_23name"] == "codelab"


def test_from_json_rejects_non_string_value():
    with pytest.raises(ValueError):
        LabelSet.from_json('{"foo": 1}')


def test_clone():
    ls = LabelSet({"monitor": "codelab", "foo": "bar", "bar": "baz"})
    clone = ls.clone()
    assert clone == ls
    clone["foo"] = "other"
    assert ls["foo"] == "bar"


def test_merge():
    ls = LabelSet({"monitor": "codelab", "foo": "bar", "bar": "baz"})
    other = LabelSet({"monitor": "codelab", "dolor": "mi", "lorem": "ipsum"})
    merged = ls.merge(other)
    assert merged == {
        "monitor": "codelab",
        "foo": "bar",
        "bar": "baz",
        "dolor": "mi",
        "lorem": "ipsum",
    }
    assert len(ls) == 3


def test_merge_overrides():
    merged = LabelSet({"a": "1"}).merge({"a": "2"})
    assert merged["a"] == "2"


def test_equal():
    assert LabelSet({"a": "b"}).equal(LabelSet({"a": "b"}))
    assert not LabelSet({"a": "b"}).equal(LabelSet({"a": "c"}))
    assert not LabelSet({"a": "b"}).equal(LabelSet({"c": "b"}))
    assert not LabelSet({"a": "b"}).equal(LabelSet({"a": "b", "c": "d"}))


def test_before():
    assert LabelSet({"a": "1"}).before(LabelSet({"a": "1", "b": "2"}))
    assert not LabelSet({"a": "1", "b": "2"}).before(LabelSet({"a": "1"}))
    assert LabelSet({"a": "1"}).before(LabelSet({"a": "2"}))
    assert not LabelSet({"a": "2"}).before(LabelSet({"a": "1"}))
    assert not LabelSet({"a": "1"}).before(LabelSet({"b": "1"}))
    assert LabelSet({"b": "1"}).before(LabelSet({"a": "1"}))
    assert not LabelSet({"a": "1"}).before(LabelSet({"a": "1"}))


def test_validate_ok():
    with use_validation_scheme(ValidationScheme.LEGACY):
        assert LabelSet({"a": "b"}).validate() is None


def test_validate_invalid_name():
    with use_validation_scheme(ValidationScheme.LEGACY):
        with pytest.raises(ValueError, match="invalid name"):
            LabelSet({"!bad": "x"}).validate()


def test_validate_invalid_value():
    with pytest.raises(ValueError, match="invalid value"):
        LabelSet({"bad": "\udcfflabel"}).validate()


def test_fingerprints():
    ls = LabelSet({"name": "garland, briggs", "fear": "love is not enough"})
    assert ls.fingerprint() == 5799056148416392346
    assert ls.fast_fingerprint() == 12952432476264840823
    assert LabelSet().fingerprint() == 14695981039346656037