"""
Validation engine - evaluates field values against rulesets.

This is the primary entry point for field feedback.
It resolves rules, runs every check, tracks touched rules, and aggregates
the outcome into validity, a status and a message.
"""

import asyncio
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass, field, replace
from typing import Any, AsyncIterator, Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple, Union

from modules.feedback.core.base import (
    FieldStatus,
    FieldType,
    RuleOutcome,
    ValidationRule,
    ValidationState,
)
from modules.feedback.core.exceptions import RuleEvaluationFault
from modules.feedback.rulesets import RuleSet, RuleSetRegistry, get_registry
from modules.feedback.suggestions import suggestions_for
from modules.feedback.tracker import TouchedRuleTracker
from shared.utils.config import settings
from shared.utils.logger import setup_logger

logger = setup_logger(__name__)


@dataclass(frozen=True)
class Evaluation:
    """Outcomes of one evaluation plus the aggregate validity"""
    outcomes: Tuple[RuleOutcome, ...]
    required_satisfied: bool
    optional_satisfied_any: bool

    @property
    def is_valid(self) -> bool:
        return self.required_satisfied and self.optional_satisfied_any

    @property
    def unsatisfied_ids(self) -> Tuple[str, ...]:
        return tuple(o.rule.id for o in self.outcomes if not o.satisfied)


def run_rule(rule: ValidationRule, value: str) -> bool:
    """
    Run one rule's check with fault containment.

    A check that raises or returns a non-boolean counts as unsatisfied.

    Args:
        rule: Rule to run
        value: Current field value

    Returns:
        Whether the rule is satisfied
    """
    try:
        result = rule.check.check(value)
    except Exception as e:
        fault = RuleEvaluationFault(rule.id, f"{type(e).__name__}: {e}")
        logger.warning(str(fault))
        return False

    if not isinstance(result, bool):
        fault = RuleEvaluationFault(rule.id, f"returned {type(result).__name__}, expected bool")
        logger.warning(str(fault))
        return False

    return result


def aggregate(outcomes: Sequence[RuleOutcome]) -> Evaluation:
    """
    Combine outcomes into validity.

    Valid when every required rule is satisfied and, if any optional
    rules exist, at least one of them is satisfied.
    """
    required = [o.satisfied for o in outcomes if o.rule.required]
    optional = [o.satisfied for o in outcomes if not o.rule.required]
    return Evaluation(
        outcomes=tuple(outcomes),
        required_satisfied=all(required),
        optional_satisfied_any=not optional or any(optional),
    )


def evaluate(value: str, rules: Iterable[ValidationRule]) -> Evaluation:
    """
    Evaluate a value against every rule, without short-circuiting.

    Args:
        value: Current field value
        rules: Ordered rules

    Returns:
        Evaluation with one outcome per rule, in rule order

    Example:
        evaluate("Abcdefg1!", rules_for("password")).is_valid  # True
    """
    return aggregate([RuleOutcome(rule=rule, satisfied=run_rule(rule, value)) for rule in rules])


def transition(
    state: ValidationState,
    new_value: str,
    rules: Iterable[ValidationRule]
) -> ValidationState:
    """
    Compute the next state of a field for a new value.

    A non-empty value marks every unsatisfied rule as touched; the touched
    set never shrinks here.

    Args:
        state: Current state
        new_value: New field value
        rules: Ordered rules

    Returns:
        New ValidationState (the old one is left unchanged)
    """
    evaluation = evaluate(new_value, rules)

    tracker = TouchedRuleTracker(state.touched_rule_ids)
    if new_value:
        newly_touched = tracker.mark(evaluation.unsatisfied_ids)
        if newly_touched:
            logger.debug(f"Rules touched: {sorted(newly_touched)}")

    return replace(
        state,
        current_value=new_value,
        outcomes=evaluation.outcomes,
        touched_rule_ids=tracker.snapshot(),
    )


def primary_message(
    outcomes: Sequence[RuleOutcome],
    touched_rule_ids: FrozenSet[str],
    generic_message: str
) -> Optional[str]:
    """
    Select the message to show for an invalid value.

    The first rule, in registration order, that is unsatisfied and either
    required or already touched supplies its error message. Without one,
    the generic message is used.

    Returns:
        Message, or None when the outcomes are valid
    """
    if aggregate(outcomes).is_valid:
        return None

    for outcome in outcomes:
        rule = outcome.rule
        if not outcome.satisfied and (rule.required or rule.id in touched_rule_ids):
            return rule.error_message or generic_message

    return generic_message


@dataclass(frozen=True)
class FieldFeedback:
    """Everything a presentation layer needs to render one field"""
    field_type: str
    value: str
    outcomes: Tuple[RuleOutcome, ...]
    is_valid: bool
    is_validating: bool
    message: Optional[str]
    touched_rule_ids: FrozenSet[str]
    suggestions: List[str] = field(default_factory=list)

    @property
    def status(self) -> FieldStatus:
        if self.is_validating:
            return FieldStatus.VALIDATING
        if not self.value:
            return FieldStatus.IDLE
        return FieldStatus.VALID if self.is_valid else FieldStatus.INVALID

    @property
    def status_text(self) -> Optional[str]:
        status = self.status
        if status == FieldStatus.VALIDATING:
            return "Validating..."
        if status == FieldStatus.VALID:
            return f"Valid {self.field_type}"
        if status == FieldStatus.INVALID:
            return self.message
        return None

    @property
    def required_outcomes(self) -> Tuple[RuleOutcome, ...]:
        return tuple(o for o in self.outcomes if o.rule.required)

    @property
    def optional_outcomes(self) -> Tuple[RuleOutcome, ...]:
        return tuple(o for o in self.outcomes if not o.rule.required)

    def requirements(self) -> List[Dict[str, Any]]:
        """
        Rows for a requirements panel, required rules first.

        Hints are included only while their rule is unsatisfied.
        """
        rows = []
        for outcome in self.required_outcomes + self.optional_outcomes:
            rows.append({
                'id': outcome.rule.id,
                'label': outcome.rule.label,
                'required': outcome.rule.required,
                'satisfied': outcome.satisfied,
                'hint': None if outcome.satisfied else outcome.rule.hint,
            })
        return rows

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return {
            'field_type': self.field_type,
            'value': self.value,
            'is_valid': self.is_valid,
            'is_validating': self.is_validating,
            'status': self.status.value,
            'message': self.message,
            'status_text': self.status_text,
            'outcomes': [o.to_dict() for o in self.outcomes],
            'touched_rule_ids': sorted(self.touched_rule_ids),
            'suggestions': list(self.suggestions),
        }


class FieldValidator:
    """
    Validation state holder for one field instance.

    Each instance exclusively owns its state; concurrent callers on the
    same instance need their own synchronization.

    Usage:
        validator = FieldValidator(FieldType.PASSWORD)
        feedback = validator.validate("Abcdefg1")

        if feedback.is_valid:
            print(feedback.status_text)
        else:
            print(feedback.message)
    """

    def __init__(
        self,
        field_type: Union[FieldType, str] = FieldType.TEXT,
        rules: Optional[Iterable[ValidationRule]] = None,
        registry: Optional[RuleSetRegistry] = None,
        validating_floor: Optional[float] = None
    ):
        """
        Initialize field validator.

        Args:
            field_type: Field type tag selecting the default ruleset
            rules: Custom rules replacing the default ruleset
            registry: Ruleset registry (defaults to the shared one)
            validating_floor: Minimum seconds validating() stays on
                              If None, uses FEEDBACK_VALIDATING_FLOOR_MS
        """
        self.registry = registry or get_registry()
        self.field_type = field_type.value if isinstance(field_type, FieldType) else str(field_type)
        self.rules: RuleSet = self.registry.resolve(field_type, rules)
        self.validating_floor = (
            settings.validating_floor_seconds if validating_floor is None else validating_floor
        )
        self._state = ValidationState()

    @property
    def state(self) -> ValidationState:
        return self._state

    @property
    def touched_rule_ids(self) -> FrozenSet[str]:
        return self._state.touched_rule_ids

    def validate(self, value: str) -> FieldFeedback:
        """
        Evaluate a new value and update this field's state.

        Args:
            value: Current field value

        Returns:
            FieldFeedback for the value
        """
        self._state = transition(self._state, value, self.rules)
        return self.feedback()

    def feedback(self) -> FieldFeedback:
        """Build feedback from the current state without re-evaluating"""
        state = self._state
        return FieldFeedback(
            field_type=self.field_type,
            value=state.current_value,
            outcomes=state.outcomes,
            is_valid=aggregate(state.outcomes).is_valid,
            is_validating=state.is_validating,
            message=primary_message(
                state.outcomes,
                state.touched_rule_ids,
                self.registry.format_generic_message(self.field_type),
            ),
            touched_rule_ids=state.touched_rule_ids,
            suggestions=suggestions_for(self.field_type, state.current_value),
        )

    def suggestions(self) -> List[str]:
        return suggestions_for(self.field_type, self._state.current_value)

    def reset(self) -> None:
        """Clear value, outcomes and touched rules"""
        self._state = ValidationState()

    def begin_validating(self) -> None:
        self._state = replace(self._state, is_validating=True)

    def end_validating(self) -> None:
        self._state = replace(self._state, is_validating=False)

    @asynccontextmanager
    async def validating(self) -> AsyncIterator["FieldValidator"]:
        """
        Mark the field as validating while the caller runs its own check.

        Rule evaluation is unaffected; the floor delay only pads a block
        that finishes faster than validating_floor.

        Usage:
            async with validator.validating():
                available = await check_username(value)
        """
        started = time.monotonic()
        self.begin_validating()
        try:
            yield self
            remaining = self.validating_floor - (time.monotonic() - started)
            if remaining > 0:
                await asyncio.sleep(remaining)
        finally:
            self.end_validating()


def validate_value(
    field_type: Union[FieldType, str],
    value: str,
    rules: Optional[Iterable[ValidationRule]] = None,
    registry: Optional[RuleSetRegistry] = None
) -> Tuple[bool, Optional[str]]:
    """
    Stateless one-off validation.

    Nothing is touched, so only required rules can supply the message.

    Returns:
        Tuple of (is_valid, message)
    """
    registry = registry or get_registry()
    evaluation = evaluate(value, registry.resolve(field_type, rules))
    key = field_type.value if isinstance(field_type, FieldType) else str(field_type)
    message = primary_message(
        evaluation.outcomes, frozenset(), registry.format_generic_message(key)
    )
    return evaluation.is_valid, message
