from ..models import OS, UNKNOWN
from .base import FacetMatcher, Rule, extract_field


class OSRule(Rule):

    def extract(self, match):
        e = self.entry
        return OS(
            family=extract_field(match, e.os_replacement, 1) or UNKNOWN,
            major=extract_field(match, e.os_v1_replacement, 2),
            minor=extract_field(match, e.os_v2_replacement, 3),
            patch=extract_field(match, e.os_v3_replacement, 4),
            patch_minor=extract_field(match, e.os_v4_replacement, 5),
        )


class OSMatcher(FacetMatcher):
    facet = 'os'
    rule_class = OSRule
    record_class = OS
