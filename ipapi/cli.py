"""命令行入口：查询一个或多个地址并以JSON输出结果"""
import sys
import json
import asyncio
import logging
import argparse
from typing import List, Optional
from ipapi.core.client import IpApiClient
from ipapi.core.errors import IpApiError
from ipapi.utils.app_path import initialize_app_dirs
from ipapi.utils.config_manager import ConfigManager
from ipapi.utils.logger import get_logger

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="通过ip-api.com查询IP地理位置")
    parser.add_argument("targets", nargs="*", help="IP地址或主机名，留空时查询本机出口IP")
    parser.add_argument("--sync", action="store_true", help="使用同步请求")
    parser.add_argument("--config", help="配置文件路径")
    parser.add_argument("--verbose", action="store_true", help="输出调试日志")
    parser.add_argument("--log-file", action="store_true", help="同时写入日志文件")
    return parser.parse_args(argv)

async def lookup_all(client, targets: List[Optional[str]]):
    """依次查询，返回(目标, 结果或异常)列表"""
    results = []
    for target in targets:
        try:
            results.append((target, await client.lookup(target)))
        except IpApiError as e:
            results.append((target, e))
    return results

def lookup_all_sync(client, targets: List[Optional[str]]):
    results = []
    for target in targets:
        try:
            results.append((target, client.lookup_sync(target)))
        except IpApiError as e:
            results.append((target, e))
    return results

def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    logger = get_logger()
    if args.verbose:
        logger.set_console_level(logging.DEBUG)
    if args.log_file:
        app_paths = initialize_app_dirs()
        log_file = logger.enable_file_logging(app_paths["logs_dir"])
        logger.debug(f"日志文件: {log_file}")

    client = IpApiClient(ConfigManager(args.config) if args.config else None)
    targets = args.targets or [None]

    if args.sync:
        results = lookup_all_sync(client, targets)
    else:
        results = asyncio.run(lookup_all(client, targets))

    exit_code = 0
    for target, result in results:
        if isinstance(result, Exception):
            print(f"{target or '本机'}: 查询失败: {result}", file=sys.stderr)
            exit_code = 1
        else:
            print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    return exit_code
