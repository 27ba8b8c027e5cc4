"""HTTP API for crash reports."""
