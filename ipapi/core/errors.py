"""查询错误定义模块
所有错误都继承自IpApiError，调用方可以统一捕获。
"""
from typing import Any, Optional


class IpApiError(Exception):
    """ip-api查询错误基类"""


class TransportError(IpApiError):
    """网络或HTTP层失败（连接错误、超时、非200状态码）

    原始异常保存在original属性中，同时作为__cause__向上传递。
    """

    def __init__(self, message: str, original: Optional[BaseException] = None,
                 status: Optional[int] = None, url: Optional[str] = None):
        super().__init__(message)
        self.original = original
        self.status = status
        self.url = url


class ParseError(IpApiError):
    """响应内容无效：不是合法JSON、不是JSON对象，或缺少query字段"""

    def __init__(self, message: str, payload: Any = None):
        super().__init__(message)
        self.payload = payload
