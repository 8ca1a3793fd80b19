from __future__ import annotations


class WorkCurveError(ValueError):
    """Base class for all errors raised while building or consuming work curves."""


class InvalidParameter(WorkCurveError):
    """A window width, offset or other numeric parameter is out of range."""


class EmptyDataset(WorkCurveError):
    """The dataset has no day records, so total-activity bounds are undefined."""


class ShapeMismatch(WorkCurveError):
    """
    Day records are not all 24 hours long, the self-report vector does not
    line up with the days, or a persisted bundle is missing a field.
    """
