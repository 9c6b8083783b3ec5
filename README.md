# prommodel

Core data structures for working with monitoring metrics: label names and
values, label sets and metrics, FNV-1a fingerprints and signatures, metric
name validation and escaping, alerts, silences, millisecond timestamps and
durations, and float and native-histogram samples with their JSON forms.

The package has no dependencies outside the standard library.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

| Module | Contents |
| --- | --- |
| `prommodel.fnv` | `hash_new`, `hash_add`, `hash_add_byte`: 64-bit FNV-1a hashing |
| `prommodel.fingerprinting` | `Fingerprint`, `FingerprintSet`, `fingerprint_from_string`, `parse_fingerprint` |
| `prommodel.names` | `ValidationScheme`, `EscapingScheme`, `NameSettings`, `use_validation_scheme`, `is_valid_metric_name`, `is_valid_legacy_metric_name`, `is_valid_utf8`, `escape_name`, `unescape_name`, `to_escaping_scheme` |
| `prommodel.labels` | `LabelName`, `LabelValue`, `LabelPair`, `MetricType`, `validate_label_name`, `format_label_names`, well-known label name constants |
| `prommodel.signature` | `labels_to_signature`, `label_set_to_fingerprint`, `label_set_to_fast_fingerprint`, `signature_for_labels`, `signature_without_labels` |
| `prommodel.labelset` | `LabelSet` |
| `prommodel.metric` | `Metric` |
| `prommodel.alert` | `AlertStatus`, `Alert`, `Alerts` |
| `prommodel.silence` | `Matcher`, `Silence` |
| `prommodel.timestamps` | `Time`, `Interval`, `Duration`, `parse_duration`, `EARLIEST`, `LATEST` |
| `prommodel.value_float` | `SampleValue`, `SamplePair`, `format_float`, `ZERO_SAMPLE_PAIR` |
| `prommodel.value_histogram` | `FloatString`, `HistogramBucket`, `SampleHistogram`, `SampleHistogramPair` |

## Examples

### Label sets and fingerprints

```python
from prommodel.labelset import LabelSet
from prommodel.metric import Metric

ls = LabelSet({"job": "api", "instance": "host:9090"})
ls.validate()                 # raises ValueError on an invalid name or value
print(ls.fingerprint())       # 64-bit FNV-1a fingerprint, printed as 16 hex digits

m = Metric({"__name__": "http_requests_total", "code": "200"})
print(m)                      # http_requests_total{code="200"}
```

`LabelSet` is a `dict` whose keys and values are stored as `LabelName` and
`LabelValue`. It also offers `equal`, `before` (the ordering used to sort
label sets), `clone`, `merge`, `fast_fingerprint` and `from_json`, which
rejects invalid label names.

### Name validation and escaping

```python
from prommodel.names import (
    EscapingScheme, ValidationScheme, escape_name, unescape_name,
    is_valid_legacy_metric_name, is_valid_metric_name, use_validation_scheme,
)

is_valid_legacy_metric_name("http.status")              # False
escape_name("http.status:sum", EscapingScheme.VALUES)   # 'U__http_2e_status:sum'
unescape_name("U__http_2e_status:sum", EscapingScheme.VALUES)  # 'http.status:sum'
escape_name("http.status:sum", EscapingScheme.DOTS)     # 'http_dot_status:sum'

with use_validation_scheme(ValidationScheme.LEGACY):
    is_valid_metric_name("my.metric")                   # False
```

The default validation scheme is UTF-8; `use_validation_scheme` switches the
process-wide setting for the duration of a `with` block.
`to_escaping_scheme("values")` maps the names `allow-utf-8`, `underscores`,
`dots` and `values` to `EscapingScheme` members.

### Durations and timestamps

```python
from prommodel.timestamps import Time, parse_duration

d = parse_duration("3w2d1h")
print(d)                      # 23d1h
t = Time.from_unix(1136239445)
print(t.add(d.to_timedelta()).to_json())
print(Time.from_json("1234.567"))   # 1234.567
```

`Time` counts milliseconds since the epoch; `Duration` counts nanoseconds
and accepts the units `y`, `w`, `d`, `h`, `m`, `s` and `ms`, biggest first.

### Alerts and silences

```python
from datetime import datetime, timedelta
from prommodel.alert import Alert, Alerts

now = datetime.now()
alert = Alert(labels={"alertname": "DiskFull"}, starts_at=now - timedelta(minutes=5))
alert.validate()
print(alert.status())         # firing
print(Alerts([alert]).status_at(now))
```

`Alerts.sort_chronologically()` orders alerts by start time, end time and
fingerprint. `Silence` and `Matcher` in `prommodel.silence` hold silence
definitions; their `validate()` methods raise `ValueError` describing the
first problem found.

### Samples and histograms

```python
from prommodel.value_float import SamplePair
from prommodel.value_histogram import SampleHistogramPair

pair = SamplePair.from_json('[1234.567,"123.1"]')
print(pair.to_json())         # [1234.567,"123.1"]

hist = SampleHistogramPair.from_json(
    '[1.5,{"count":"1","sum":"3","buckets":[[0,"2","4","1"]]}]'
)
print(hist)
```

## What the package does not do

It holds single samples only: float `SamplePair`s and `SampleHistogramPair`s.
It has no types for whole query results (labelled samples, vectors, matrices
of sample streams, scalar or string results) and no enumeration of result
types. It has no command-line program, no server and no storage.