"""
Field checks module.

Contains generic checks that operate on a single string value:
- PatternCheck: Match against a regex pattern
- MinLengthCheck: Minimum string length
- DigitCountCheck: Count of digits in the value
- EmailDomainCheck: Domain part of an email contains a dot
- AllOfCheck: Conjunction of nested checks
- PredicateCheck: Wrap a plain callable
"""

import re
from typing import Any, Callable, Dict, List, Optional

from modules.feedback.core.base import BaseCheck
from modules.feedback.core.exceptions import ConfigurationException
from modules.feedback.core.registry import register_check, create_check
from shared.utils.helpers import strip_non_digits


@register_check("pattern")
class PatternCheck(BaseCheck):
    """
    Validate value against a regex pattern.

    Configuration:
        params:
          pattern: "[A-Z]"
          full_match: false  # optional, whole value must match
          remove: " "        # optional, characters removed before matching
          flags: 0           # optional, regex flags

    Example:
        - id: zip
          label: Valid ZIP code
          check: pattern
          params:
            pattern: "[0-9]{5}(-[0-9]{4})?"
            full_match: true
    """

    def __init__(self, params: Optional[Dict[str, Any]] = None):
        super().__init__(params)
        pattern = self.params.get('pattern')
        if not pattern:
            raise ConfigurationException("Pattern check requires 'pattern' parameter")

        flags = self.params.get('flags', 0)
        try:
            self._regex = re.compile(pattern, flags)
            remove = self.params.get('remove')
            self._remove = re.compile(remove) if remove else None
        except re.error as e:
            raise ConfigurationException(f"Invalid regex pattern: {e}") from e

        self._full_match = bool(self.params.get('full_match', False))

    def check(self, value: str) -> bool:
        if self._remove is not None:
            value = self._remove.sub("", value)
        if self._full_match:
            return self._regex.fullmatch(value) is not None
        return self._regex.search(value) is not None


@register_check("min_length")
class MinLengthCheck(BaseCheck):
    """
    Validate minimum string length.

    Configuration:
        params:
          min_length: 8
          strip: false  # optional, ignore surrounding whitespace
    """

    def check(self, value: str) -> bool:
        if self.params.get('strip', False):
            value = value.strip()
        return len(value) >= self.params.get('min_length', 1)


@register_check("digit_count")
class DigitCountCheck(BaseCheck):
    """
    Validate how many digits the value contains, ignoring everything else.

    Configuration:
        params:
          min_digits: 10
          max_digits: 15  # optional
    """

    def check(self, value: str) -> bool:
        count = len(strip_non_digits(value))
        max_digits = self.params.get('max_digits')
        if max_digits is not None and count > max_digits:
            return False
        return count >= self.params.get('min_digits', 1)


@register_check("email_domain")
class EmailDomainCheck(BaseCheck):
    """
    Pass unless the value has an "@" whose domain part lacks a dot.

    Values without "@" pass; the format rule reports those.
    """

    def check(self, value: str) -> bool:
        if "@" not in value:
            return True
        return "." in value.split("@")[1]


@register_check("all_of")
class AllOfCheck(BaseCheck):
    """
    Pass only when every nested check passes.

    Configuration:
        params:
          checks:
            - check: pattern
              params: {pattern: "[0-9 ()+-]+", full_match: true}
            - check: digit_count
              params: {min_digits: 10}
    """

    def __init__(self, params: Optional[Dict[str, Any]] = None):
        super().__init__(params)
        self.checks: List[BaseCheck] = [
            create_check(entry['check'], entry.get('params'))
            for entry in self.params.get('checks', [])
        ]

    def check(self, value: str) -> bool:
        return all(nested.check(value) for nested in self.checks)


@register_check("predicate")
class PredicateCheck(BaseCheck):
    """
    Wrap a plain callable as a check.

    Only usable from code, since YAML cannot carry callables.

    Example:
        PredicateCheck({'predicate': lambda v: v.startswith('ACME-')})
    """

    def __init__(self, params: Optional[Dict[str, Any]] = None):
        super().__init__(params)
        predicate: Optional[Callable[[str], bool]] = self.params.get('predicate')
        if not callable(predicate):
            raise ConfigurationException("Predicate check requires a callable 'predicate' parameter")
        self._predicate = predicate

    def check(self, value: str) -> bool:
        return self._predicate(value)
