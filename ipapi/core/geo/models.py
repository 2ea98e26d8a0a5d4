"""查询结果数据模型"""
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class NameAndCode:
    """名称与代码，例如 ("United States", "US")"""
    name: str
    code: str


@dataclass(frozen=True)
class Coordinates:
    """经纬度，单位为度"""
    latitude: float
    longitude: float


@dataclass(frozen=True)
class LookupResult:
    """一次IP查询的结果

    除query外，所有可选字段仅在接口返回对应键且值不为null时才有值。
    """
    query: str
    country: Optional[NameAndCode] = None
    region: Optional[NameAndCode] = None
    city: Optional[str] = None
    zip: Optional[str] = None
    location: Optional[Coordinates] = None
    timezone: Optional[str] = None
    isp: Optional[str] = None
    organization: Optional[str] = None
    autonomous_system: Optional[str] = None
    reverse: Optional[str] = None
    mobile: bool = False
    proxy: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """转换为可JSON序列化的字典"""
        return asdict(self)
