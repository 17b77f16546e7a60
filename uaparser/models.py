from dataclasses import asdict, dataclass, field
from typing import Optional

UNKNOWN = 'Other'


@dataclass(frozen=True)
class UserAgent:
    family: str = UNKNOWN
    major: Optional[str] = None
    minor: Optional[str] = None
    patch: Optional[str] = None

    def to_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class OS:
    family: str = UNKNOWN
    major: Optional[str] = None
    minor: Optional[str] = None
    patch: Optional[str] = None
    patch_minor: Optional[str] = None

    def to_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class Device:
    family: str = UNKNOWN
    brand: Optional[str] = None
    model: Optional[str] = None

    def to_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class Client:
    """Результат разбора по всем трём фасетам"""
    user_agent: UserAgent = field(default_factory=UserAgent)
    os: OS = field(default_factory=OS)
    device: Device = field(default_factory=Device)

    def to_dict(self):
        return {
            'user_agent': self.user_agent.to_dict(),
            'os': self.os.to_dict(),
            'device': self.device.to_dict(),
        }
