"""
Validation rule definitions for generated dungeons.

Rules are organized by category:
- GRID: Tile grid shape and contents
- ROOM: Room placement
- WALL: Wall derivation
- CONN: Connector graph
- NAV: Navigation index and spawn
"""

from dataclasses import dataclass
from typing import Optional

from .core import Severity, ValidationIssue


@dataclass(frozen=True)
class ValidationRule:
    """Definition of a validation rule.

    Attributes:
        code: Unique rule code (e.g., "ROOM-001")
        severity: Default severity for this rule
        message_template: Template for the issue message (use {placeholders})
        description: Full description of the rule
    """
    code: str
    severity: Severity
    message_template: str
    description: Optional[str] = None

    def format_message(self, **kwargs) -> str:
        return self.message_template.format(**kwargs)

    def issue(self, location: Optional[str] = None, **kwargs) -> ValidationIssue:
        """Build an issue for this rule."""
        return ValidationIssue(
            severity=self.severity,
            code=self.code,
            message=self.format_message(**kwargs),
            location=location,
        )


# =============================================================================
# GRID RULES
# =============================================================================

GRID_001 = ValidationRule(
    code="GRID-001",
    severity=Severity.FAIL,
    message_template="Grid is {width}x{height}, settings ask for {expected_width}x{expected_height}",
    description="Grid dimensions must match the generation settings",
)

GRID_002 = ValidationRule(
    code="GRID-002",
    severity=Severity.FAIL,
    message_template="Grid holds {count} cell(s) with unknown tile values",
    description="Every cell must be EMPTY, FLOOR or WALL",
)

# =============================================================================
# ROOM RULES
# =============================================================================

ROOM_001 = ValidationRule(
    code="ROOM-001",
    severity=Severity.FAIL,
    message_template="Room {room_id} extends outside the grid",
    description="Rooms must lie fully inside the grid",
)

ROOM_002 = ValidationRule(
    code="ROOM-002",
    severity=Severity.FAIL,
    message_template="Rooms {room_a} and {room_b} overlap",
    description="Rooms must not intersect",
)

ROOM_003 = ValidationRule(
    code="ROOM-003",
    severity=Severity.FAIL,
    message_template="Room {room_id} has {count} non-floor cell(s)",
    description="Every room cell must be FLOOR",
)

# =============================================================================
# WALL RULES
# =============================================================================

WALL_001 = ValidationRule(
    code="WALL-001",
    severity=Severity.FAIL,
    message_template="{count} EMPTY cell(s) touch FLOOR",
    description="No EMPTY cell may have a FLOOR cell in its 8-neighbourhood",
)

WALL_002 = ValidationRule(
    code="WALL-002",
    severity=Severity.FAIL,
    message_template="{count} WALL cell(s) have no FLOOR neighbour",
    description="Every WALL cell must have a FLOOR cell in its 8-neighbourhood",
)

# =============================================================================
# CONNECTOR RULES
# =============================================================================

CONN_001 = ValidationRule(
    code="CONN-001",
    severity=Severity.FAIL,
    message_template="{count} triangulated room centre(s) not reached by connectors",
    description="Connectors must span every centre connected in the triangulation",
)

CONN_002 = ValidationRule(
    code="CONN-002",
    severity=Severity.FAIL,
    message_template="Connector {edge} is not a triangulation edge",
    description="Connectors are a subset of the triangulation",
)

CONN_003 = ValidationRule(
    code="CONN-003",
    severity=Severity.WARN,
    message_template="Room {room_id} is not reachable on foot from the spawn",
    description="Rooms joined by connectors should share the spawn's floor region",
)

# =============================================================================
# NAVIGATION RULES
# =============================================================================

NAV_001 = ValidationRule(
    code="NAV-001",
    severity=Severity.FAIL,
    message_template="Navigation has {nodes} node(s) for {floor} floor tile(s)",
    description="The navigation index holds exactly one node per FLOOR tile",
)

NAV_002 = ValidationRule(
    code="NAV-002",
    severity=Severity.FAIL,
    message_template="Spawn ({x:g}, {y:g}) is not on a floor tile",
    description="With at least one room the spawn must be walkable",
)


ALL_RULES = {
    rule.code: rule
    for rule in (
        GRID_001, GRID_002,
        ROOM_001, ROOM_002, ROOM_003,
        WALL_001, WALL_002,
        CONN_001, CONN_002, CONN_003,
        NAV_001, NAV_002,
    )
}


def get_rule(code: str) -> Optional[ValidationRule]:
    """Get a rule by its code, or None if unknown."""
    return ALL_RULES.get(code)


def get_rules_by_category(prefix: str) -> list:
    """Get all rules with a given prefix (e.g. "ROOM")."""
    return [rule for code, rule in ALL_RULES.items() if code.startswith(prefix)]
