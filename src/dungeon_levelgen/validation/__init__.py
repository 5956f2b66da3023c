"""
Validation package for generated dungeons.

Public API:
    - ValidationResult, ValidationIssue, Severity: Core result types
    - ValidationError: Exception carrying a failed result
    - validate_dungeon(): Run every invariant check
"""

from .core import (
    Severity,
    ValidationIssue,
    ValidationResult,
    ValidationError,
)
from .rules import ValidationRule, get_rule, get_rules_by_category
from .checks import (
    check_connectors,
    check_grid,
    check_navigation,
    check_reachability,
    check_rooms,
    check_walls,
    validate_dungeon,
)

__all__ = [
    # Core types
    'Severity',
    'ValidationIssue',
    'ValidationResult',
    'ValidationError',
    # Rules
    'ValidationRule',
    'get_rule',
    'get_rules_by_category',
    # Checks
    'check_connectors',
    'check_grid',
    'check_navigation',
    'check_reachability',
    'check_rooms',
    'check_walls',
    'validate_dungeon',
]
