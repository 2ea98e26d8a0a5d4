"""地理信息处理包

提供ip-api响应映射、查询结果模型等功能。
"""

from .mapper import get_mapper, ResponseMapper
from .models import LookupResult, NameAndCode, Coordinates

__all__ = ['get_mapper', 'ResponseMapper', 'LookupResult', 'NameAndCode', 'Coordinates']
