from ..models import UNKNOWN, Device
from .base import FacetMatcher, Rule, extract_field


class DeviceRule(Rule):
    """Бренд берётся только из шаблона, модель по умолчанию из первой группы"""

    def extract(self, match):
        e = self.entry
        return Device(
            family=extract_field(match, e.device_replacement, 1) or UNKNOWN,
            brand=extract_field(match, e.brand_replacement),
            model=extract_field(match, e.model_replacement, 1),
        )


class DeviceMatcher(FacetMatcher):
    facet = 'device'
    rule_class = DeviceRule
    record_class = Device
