"""Exceptions raised by the simulation core."""

from __future__ import annotations


class BonsaiError(Exception):
    """Base class for all simulation-core errors."""


class ConfigurationError(BonsaiError, ValueError):
    """A name or value does not match anything the core knows about.

    Raised for unknown action names, feed variants, stat names and enum
    values, and for out-of-range configuration options.  Usually means a
    front end or config file is mis-wired.
    """


class LoadFailed(BonsaiError):
    """A snapshot could not be read or decoded.

    Recoverable: callers fall back to a fresh default pet.
    """
