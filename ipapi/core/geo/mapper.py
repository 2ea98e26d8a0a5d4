"""响应映射器实现模块
将ip-api返回的松散类型JSON对象转换为LookupResult。
"""
import json
from typing import Any, Dict, Optional, Union
from .data import (
    QUERY_KEY,
    STATUS_KEY,
    MESSAGE_KEY,
    NAME_AND_CODE_KEYS,
    COORDINATE_KEYS,
    STRING_KEYS,
    BOOL_KEYS
)
from .models import LookupResult, NameAndCode, Coordinates
from ipapi.core.errors import ParseError
from ipapi.utils.logger import get_logger

logger = get_logger()

class ResponseMapper:
    """响应映射器类

    负责把接口返回的JSON对象映射为LookupResult。缺失或为null的可选字段
    映射为None，类型不符的值同样视为缺失；只有query是必填字段。
    映射器本身无状态，采用单例模式实现。
    """

    _instance = None

    @classmethod
    def get_instance(cls) -> 'ResponseMapper':
        """获取映射器实例（单例模式）

        Returns:
            ResponseMapper: 映射器实例
        """
        if cls._instance is None:
            cls._instance = ResponseMapper()
        return cls._instance

    def parse(self, body: Union[str, bytes]) -> LookupResult:
        """解析原始响应内容

        Args:
            body: 响应正文，字节串按UTF-8解码

        Returns:
            LookupResult: 查询结果

        Raises:
            ParseError: 内容不是合法的UTF-8或JSON
        """
        if isinstance(body, (bytes, bytearray)):
            try:
                body = body.decode("utf-8")
            except UnicodeDecodeError as e:
                raise ParseError(f"响应内容不是有效的UTF-8: {e}", payload=body) from e

        try:
            payload = json.loads(body)
        except (ValueError, RecursionError) as e:
            raise ParseError(f"响应内容不是有效的JSON: {e}", payload=body) from e

        return self.map(payload)

    def map(self, payload: Any) -> LookupResult:
        """将JSON对象映射为查询结果

        Args:
            payload: 已解析的JSON值

        Returns:
            LookupResult: 查询结果

        Raises:
            ParseError: payload不是JSON对象，或query字段缺失/无效
        """
        if not isinstance(payload, dict):
            raise ParseError(f"响应不是JSON对象: {type(payload).__name__}", payload=payload)

        query = payload.get(QUERY_KEY)
        if not isinstance(query, str) or not query:
            raise ParseError(f"响应缺少有效的query字段: {query!r}", payload=payload)

        # 查询失败时接口仍返回query，其余字段为空，这里只记录不报错
        if payload.get(STATUS_KEY) == "fail":
            logger.warning(f"ip-api查询失败: {query}, 原因: {payload.get(MESSAGE_KEY)}")

        fields: Dict[str, Any] = {}
        for field, (name_key, code_key) in NAME_AND_CODE_KEYS.items():
            fields[field] = self._get_name_and_code(payload, name_key, code_key)
        for field, key in STRING_KEYS.items():
            fields[field] = self._get_string(payload, key)
        for field, key in BOOL_KEYS.items():
            fields[field] = self._get_bool(payload, key)
        fields["location"] = self._get_coordinates(payload, *COORDINATE_KEYS)

        result = LookupResult(query=query, **fields)
        logger.debug(f"映射查询结果: {result}")
        return result

    @staticmethod
    def _get_string(payload: Dict[str, Any], key: str) -> Optional[str]:
        value = payload.get(key)
        return value if isinstance(value, str) else None

    @staticmethod
    def _get_bool(payload: Dict[str, Any], key: str) -> bool:
        return payload.get(key) is True

    @staticmethod
    def _get_float(payload: Dict[str, Any], key: str) -> Optional[float]:
        value = payload.get(key)
        # bool是int的子类，需要排除
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        try:
            return float(value)
        except OverflowError:
            # 超出浮点范围的整数视为无效值
            return None

    def _get_name_and_code(self, payload: Dict[str, Any], name_key: str, code_key: str) -> Optional[NameAndCode]:
        """名称和代码都存在时才返回"""
        name = self._get_string(payload, name_key)
        code = self._get_string(payload, code_key)
        if name is None or code is None:
            return None
        return NameAndCode(name=name, code=code)

    def _get_coordinates(self, payload: Dict[str, Any], latitude_key: str, longitude_key: str) -> Optional[Coordinates]:
        """经度和纬度都存在时才返回"""
        latitude = self._get_float(payload, latitude_key)
        longitude = self._get_float(payload, longitude_key)
        if latitude is None or longitude is None:
            return None
        return Coordinates(latitude=latitude, longitude=longitude)


# 快捷访问方法
def get_mapper() -> ResponseMapper:
    """获取响应映射器实例

    Returns:
        ResponseMapper: 映射器实例
    """
    return ResponseMapper.get_instance()
