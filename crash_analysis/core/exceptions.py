"""Errors raised when an analysis call receives parameters it cannot honour."""


class CrashAnalysisError(ValueError):
    """Base class for crash analysis parameter errors."""


class InvalidDimension(CrashAnalysisError):
    """Requested group-by selector is not a known record field."""

    def __init__(self, name):
        self.name = name
        super().__init__(f"Unknown group-by dimension: {name!r}")


class InvalidMetric(CrashAnalysisError):
    """Requested metric is not supported by the aggregator."""

    def __init__(self, name):
        self.name = name
        super().__init__(f"Unsupported metric: {name!r}")


class UnknownCategory(CrashAnalysisError):
    """Report category outside ROAD, WEATHER and LIGHT."""

    def __init__(self, name):
        self.name = name
        super().__init__(f"Unknown report category: {name!r} (expected ROAD, WEATHER or LIGHT)")


class InvalidRecord(CrashAnalysisError):
    """Crash record violates a data-model invariant."""

    def __init__(self, report_number, reason):
        self.report_number = report_number
        self.reason = reason
        super().__init__(f"Invalid crash record {report_number!r}: {reason}")
