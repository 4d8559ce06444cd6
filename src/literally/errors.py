from __future__ import annotations


class LiterallyError(Exception):
    """Base class for errors raised while compiling a literate document."""


class ParseError(LiterallyError):
    """The markdown source could not be tokenized."""


class RetargetError(LiterallyError):
    """A retarget rule carries an invalid regular expression."""


class ConfigError(LiterallyError):
    """The configuration file is missing or malformed."""
