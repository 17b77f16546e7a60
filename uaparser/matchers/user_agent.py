from ..models import UNKNOWN, UserAgent
from .base import FacetMatcher, Rule, extract_field


class UserAgentRule(Rule):

    def extract(self, match):
        e = self.entry
        return UserAgent(
            family=extract_field(match, e.family_replacement, 1) or UNKNOWN,
            major=extract_field(match, e.v1_replacement, 2),
            minor=extract_field(match, e.v2_replacement, 3),
            patch=extract_field(match, e.v3_replacement, 4),
        )


class UserAgentMatcher(FacetMatcher):
    facet = 'user_agent'
    rule_class = UserAgentRule
    record_class = UserAgent
