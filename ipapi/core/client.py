import asyncio
import ipaddress
import aiohttp
import requests
from typing import Any, Dict, List, Optional, Union
from urllib.parse import quote, urlencode
from ipapi.core.errors import ParseError, TransportError
from ipapi.core.geo import LookupResult, get_mapper
from ipapi.core.geo.data import DEFAULT_ENDPOINT, DEFAULT_TIMEOUT, default_fields
from ipapi.utils.app_path import APP_NAME, APP_VERSION
from ipapi.utils.config_manager import ConfigManager
from ipapi.utils.logger import get_logger

logger = get_logger()

IPAddressLike = Union[str, ipaddress.IPv4Address, ipaddress.IPv6Address]

class IpApiClient:
    """ip-api.com查询客户端

    每次调用只发送一个GET请求，不做重试、缓存或限流。网络和HTTP错误以
    TransportError抛出，响应内容无效以ParseError抛出。
    """

    # 默认User-Agent
    DEFAULT_USER_AGENT = f"{APP_NAME}/{APP_VERSION}"

    def __init__(self, config_manager: Optional[ConfigManager] = None,
                 session: Optional[aiohttp.ClientSession] = None):
        """初始化查询客户端

        Args:
            config_manager: 配置管理器，为None时读取默认配置文件
            session: 调用方持有的aiohttp会话，为None时每次查询临时创建
        """
        self.config_manager = config_manager or ConfigManager()
        self.session = session
        self.mapper = get_mapper()

        # 加载配置
        self._load_config()

    def _load_config(self):
        """从配置管理器加载配置"""
        settings = self.config_manager.load_settings() or {}
        ipapi_settings = settings.get("ipapi", {})
        if not isinstance(ipapi_settings, dict):
            ipapi_settings = {}

        # 查询接口地址，确保以/结尾以便拼接IP
        endpoint = ipapi_settings.get("endpoint") or DEFAULT_ENDPOINT
        if not isinstance(endpoint, str):
            logger.warning(f"接口地址配置无效，使用默认值: {DEFAULT_ENDPOINT}")
            endpoint = DEFAULT_ENDPOINT
        self.endpoint = endpoint if endpoint.endswith("/") else endpoint + "/"

        # 超时时间（秒）
        try:
            self.timeout = float(ipapi_settings.get("timeout", DEFAULT_TIMEOUT))
            if self.timeout <= 0:
                raise ValueError(self.timeout)
        except (ValueError, TypeError):
            logger.warning(f"超时配置无效，使用默认值: {DEFAULT_TIMEOUT}秒")
            self.timeout = float(DEFAULT_TIMEOUT)

        # 请求字段，支持列表或逗号分隔的字符串；显式配置为空时不附加fields参数
        fields = ipapi_settings.get("fields")
        if isinstance(fields, str):
            self.fields: List[str] = [f.strip() for f in fields.split(",") if f.strip()]
        elif isinstance(fields, list):
            self.fields = [str(f) for f in fields]
        else:
            if fields is not None:
                logger.warning("字段配置无效，使用默认字段列表")
            self.fields = default_fields()

        # 返回语言（可选）
        lang = ipapi_settings.get("lang") or None
        if lang is not None and not isinstance(lang, str):
            logger.warning(f"语言配置无效，忽略: {lang!r}")
            lang = None
        self.lang: Optional[str] = lang

        user_agent = ipapi_settings.get("user_agent")
        self.user_agent = user_agent if isinstance(user_agent, str) and user_agent else self.DEFAULT_USER_AGENT

        logger.debug(f"查询客户端配置: 接口={self.endpoint}, 超时={self.timeout}秒, 语言={self.lang}")

    def build_url(self, ip: Optional[IPAddressLike] = None) -> str:
        """构建查询URL

        Args:
            ip: IP地址或主机名，为None或空字符串时查询本机出口IP

        Returns:
            str: 查询URL
        """
        target = "" if ip is None else str(ip).strip()
        url = self.endpoint + quote(target, safe=":")

        params: Dict[str, Any] = {}
        if self.fields:
            params["fields"] = ",".join(self.fields)
        if self.lang:
            params["lang"] = self.lang
        if params:
            url += "?" + urlencode(params, safe=",")
        return url

    def _headers(self) -> Dict[str, str]:
        return {'User-Agent': self.user_agent}

    async def lookup(self, ip: Optional[IPAddressLike] = None) -> LookupResult:
        """异步查询IP地理位置

        Args:
            ip: IP地址或主机名，为None时查询本机出口IP

        Returns:
            LookupResult: 查询结果

        Raises:
            TransportError: 网络错误、超时或非200状态码
            ParseError: 响应不是有效的JSON对象或缺少query字段
        """
        url = self.build_url(ip)
        logger.debug(f"发送查询请求: {url}")

        try:
            if self.session is not None:
                body = await self._fetch(self.session, url)
            else:
                async with aiohttp.ClientSession() as session:
                    body = await self._fetch(session, url)
        except asyncio.TimeoutError as e:
            logger.error(f"查询超时: {url}")
            raise TransportError(f"请求超时: {url}", original=e, url=url) from e
        except aiohttp.ClientError as e:
            logger.error(f"查询请求失败: {url}, {str(e)}")
            raise TransportError(f"请求失败: {str(e)}", original=e, url=url) from e

        return self._parse(body, url)

    async def _fetch(self, session: aiohttp.ClientSession, url: str) -> bytes:
        """发送GET请求并读取完整响应正文"""
        request_kwargs = {
            'timeout': aiohttp.ClientTimeout(total=self.timeout),
            'headers': self._headers()
        }
        async with session.get(url, **request_kwargs) as response:
            if response.status != 200:
                logger.error(f"查询返回HTTP错误: {response.status}, URL: {url}")
                raise TransportError(f"HTTP错误: {response.status}", status=response.status, url=url)
            return await response.read()

    def lookup_sync(self, ip: Optional[IPAddressLike] = None) -> LookupResult:
        """同步查询IP地理位置，语义与lookup相同

        Args:
            ip: IP地址或主机名，为None时查询本机出口IP

        Returns:
            LookupResult: 查询结果
        """
        url = self.build_url(ip)
        logger.debug(f"发送同步查询请求: {url}")

        try:
            response = requests.get(url, timeout=self.timeout, headers=self._headers())
        except requests.exceptions.RequestException as e:
            logger.error(f"查询请求失败: {url}, {str(e)}")
            raise TransportError(f"请求失败: {str(e)}", original=e, url=url) from e

        if response.status_code != 200:
            logger.error(f"查询返回HTTP错误: {response.status_code}, URL: {url}")
            raise TransportError(f"HTTP错误: {response.status_code}", status=response.status_code, url=url)

        return self._parse(response.content, url)

    def _parse(self, body: bytes, url: str) -> LookupResult:
        try:
            return self.mapper.parse(body)
        except ParseError as e:
            logger.error(f"解析查询响应失败: {url}, {str(e)}")
            raise
