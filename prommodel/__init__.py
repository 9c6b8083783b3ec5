"""Data model for metrics, labels, fingerprints, alerts, silences, timestamps and samples."""

__version__ = "0.1.0"