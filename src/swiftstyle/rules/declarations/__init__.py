"""Declaration and code-organization rules."""

from swiftstyle.rules.declarations.access_control import AccessAndFinalDefaultRule
from swiftstyle.rules.declarations.naming import NamingDescriptivenessRule
from swiftstyle.rules.declarations.section_marker import SectionMarkerRule

__all__ = [
  "AccessAndFinalDefaultRule",
  "NamingDescriptivenessRule",
  "SectionMarkerRule",
]
