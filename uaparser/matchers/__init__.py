from .base import DEFAULT_SIZE_LIMIT, FacetMatcher
from .device import DeviceMatcher
from .operating_system import OSMatcher
from .user_agent import UserAgentMatcher

__all__ = ['DEFAULT_SIZE_LIMIT', 'FacetMatcher', 'DeviceMatcher', 'OSMatcher', 'UserAgentMatcher']
