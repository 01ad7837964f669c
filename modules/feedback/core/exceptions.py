"""
Custom exceptions for feedback module.
"""


class FeedbackException(Exception):
    """Base exception for feedback module."""
    pass


class ConfigurationException(FeedbackException):
    """Exception raised for configuration errors."""
    pass


class MalformedRuleSetError(ConfigurationException):
    """Exception raised when a ruleset contains duplicate rule ids."""
    pass


class UnknownCheckError(ConfigurationException):
    """Exception raised when a rule references an unregistered check."""
    pass


class UnknownFieldTypeError(ConfigurationException):
    """Exception raised when no ruleset is registered for a field type."""
    pass


class RuleEvaluationFault(FeedbackException):
    """
    A rule check raised or returned a non-boolean.

    Never raised to callers: the engine records it and treats the rule
    as unsatisfied.
    """

    def __init__(self, rule_id: str, reason: str):
        self.rule_id = rule_id
        self.reason = reason
        super().__init__(f"Rule '{rule_id}' failed to evaluate: {reason}")


class SuggestionComputationFault(FeedbackException):
    """Suggestion heuristics failed; callers receive no suggestions."""
    pass
