"""First-match layout rule selection.

A short-circuiting linear scan over enabled rules in ascending priority. Rule
authors order specificity through priorities; this is not a constraint solver.
"""

from typing import Iterable, Protocol

from slides_server.app.slides.layout.types import ContentFeatures, LayoutConditions, NumericCondition

_BOOLEAN_FIELDS = ('has_heading', 'has_cards', 'has_list', 'has_code_block', 'has_blockquote')
_NUMERIC_FIELDS = ('image_count', 'figure_count', 'h3_count', 'text_paragraph_count')


class MatchableRule(Protocol):
    id: str
    name: str
    priority: int
    enabled: bool
    conditions: LayoutConditions | None


def match_numeric(value: int, condition: NumericCondition) -> bool:
    if condition.eq is not None and value != condition.eq:
        return False
    if condition.gt is not None and value <= condition.gt:
        return False
    if condition.gte is not None and value < condition.gte:
        return False
    if condition.lte is not None and value > condition.lte:
        return False
    return True


def matches_conditions(features: ContentFeatures, conditions: LayoutConditions | None) -> bool:
    """True when every predicate present in ``conditions`` holds for ``features``"""
    if conditions is None:
        return True

    for field in _BOOLEAN_FIELDS:
        expected = getattr(conditions, field)
        if expected is not None and getattr(features, field) != expected:
            return False

    for field in _NUMERIC_FIELDS:
        condition = getattr(conditions, field)
        if condition is not None and not match_numeric(getattr(features, field), condition):
            return False

    return True


def rule_order(rule: MatchableRule) -> tuple[int, str, str]:
    """Ascending priority, ties broken by name then id"""
    return rule.priority, rule.name, rule.id


def select_rule(features: ContentFeatures, rules: Iterable[MatchableRule]) -> MatchableRule | None:
    """
    Pick the first enabled rule whose conditions all hold

    Rules whose stored conditions could not be decoded never match.

    :param features: structural summary of the slide
    :param rules: candidate rules in any order
    :return: the matching rule, or None when no layout override applies
    """
    for rule in sorted((r for r in rules if r.enabled), key=rule_order):
        if rule.conditions is None:
            continue
        if matches_conditions(features, rule.conditions):
            return rule
    return None
