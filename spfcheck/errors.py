from __future__ import annotations


class SpfCheckError(Exception):
    """Base class for every failure raised by the UV lookup pipeline."""


class NetworkError(SpfCheckError):
    """Provider request failed or answered with a non-2xx status."""


class ParseError(SpfCheckError):
    """Provider answered with malformed JSON or a payload missing required fields."""


class NotFound(SpfCheckError):
    """Forward geocoding returned no candidates."""


class InputError(SpfCheckError):
    """Search text was empty or a coordinate was out of range."""
