"""ip-api.com地理位置查询客户端"""

from ipapi.utils.app_path import APP_VERSION as __version__
from ipapi.core.client import IpApiClient
from ipapi.core.errors import IpApiError, TransportError, ParseError
from ipapi.core.geo import LookupResult, NameAndCode, Coordinates, ResponseMapper, get_mapper

__all__ = [
    'IpApiClient',
    'IpApiError',
    'TransportError',
    'ParseError',
    'LookupResult',
    'NameAndCode',
    'Coordinates',
    'ResponseMapper',
    'get_mapper',
]
