"""ip-api字段数据模块
提供ip-api.com响应字段名与查询结果字段之间的对应关系。
"""
from typing import Dict, List, Tuple

# 默认查询接口，免费版只支持HTTP
DEFAULT_ENDPOINT = "http://ip-api.com/json/"

# 默认超时时间（秒）
DEFAULT_TIMEOUT = 10

# 必填字段
QUERY_KEY = "query"

# 查询状态字段，仅用于日志，不映射到结果
STATUS_KEY = "status"
MESSAGE_KEY = "message"

# 名称+代码成对字段: 结果字段 -> (名称键, 代码键)
NAME_AND_CODE_KEYS: Dict[str, Tuple[str, str]] = {
    "country": ("country", "countryCode"),
    "region": ("regionName", "region"),
}

# 坐标字段: (纬度键, 经度键)
COORDINATE_KEYS: Tuple[str, str] = ("lat", "lon")

# 字符串字段: 结果字段 -> JSON键
STRING_KEYS: Dict[str, str] = {
    "city": "city",
    "zip": "zip",
    "timezone": "timezone",
    "isp": "isp",
    "organization": "org",
    "autonomous_system": "as",
    "reverse": "reverse",
}

# 布尔字段: 结果字段 -> JSON键，缺失时为False
BOOL_KEYS: Dict[str, str] = {
    "mobile": "mobile",
    "proxy": "proxy",
}


def default_fields() -> List[str]:
    """获取默认请求的字段列表

    ip-api默认不返回reverse/mobile/proxy，需要通过fields参数显式请求。

    Returns:
        List[str]: 字段名列表
    """
    fields = [STATUS_KEY, MESSAGE_KEY]
    for name_key, code_key in NAME_AND_CODE_KEYS.values():
        fields.extend([name_key, code_key])
    fields.extend(COORDINATE_KEYS)
    fields.extend(STRING_KEYS.values())
    fields.extend(BOOL_KEYS.values())
    fields.append(QUERY_KEY)
    return fields
