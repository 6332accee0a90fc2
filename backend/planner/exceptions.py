"""Errors raised while planning a round trip."""


class RoutePlanningError(Exception):
    """Base class for failures that abort a planning request."""


class InvalidRequestError(RoutePlanningError):
    """The depot or the stop list is missing."""


class GeocodingError(RoutePlanningError):
    """An address is empty or could not be resolved to coordinates."""


class MatrixError(RoutePlanningError):
    """The matrix service response lacks distances or durations."""
