"""Exceptions raised while building a rule set."""


class RuleConfigError(ValueError):
    """Raised when rule configuration is malformed or a pattern does not compile.

    This is a startup failure: no rule set is built and nothing can be parsed.
    """
