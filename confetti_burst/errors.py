from __future__ import annotations


class ConfettiError(Exception):
    """Base class for errors raised by confetti_burst."""


class ConfigError(ConfettiError, ValueError):
    """Invalid burst parameters or a malformed config file.

    Raised at construction time so a misconfigured cannon never starts.
    """
