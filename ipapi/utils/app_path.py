"""应用路径模块
日志和配置文件都放在用户主目录下的应用目录中，目录在首次使用时创建。
"""
import os
from typing import Dict

APP_NAME = "ipapi-client"
APP_VERSION = "0.1.0"

def get_app_name() -> str:
    """获取应用名称"""
    return APP_NAME

def get_app_dir() -> str:
    """获取应用主目录路径（~/ipapi-client），不存在则创建

    Returns:
        str: 应用主目录的绝对路径
    """
    return ensure_dir_exists(os.path.join(os.path.expanduser("~"), APP_NAME))

def ensure_dir_exists(path: str) -> str:
    """创建目录（含上级目录），多进程同时创建也不会报错

    Args:
        path: 目录路径

    Returns:
        str: 传入的目录路径
    """
    os.makedirs(path, exist_ok=True)
    return path

def get_logs_dir() -> str:
    """获取日志目录路径"""
    return ensure_dir_exists(os.path.join(get_app_dir(), "logs"))

def get_config_dir() -> str:
    """获取配置目录路径"""
    return ensure_dir_exists(os.path.join(get_app_dir(), "config"))

def get_config_file_path(filename: str = "settings.json") -> str:
    """获取配置文件的完整路径

    Args:
        filename: 配置文件名，默认为settings.json

    Returns:
        str: 配置文件的绝对路径
    """
    return os.path.join(get_config_dir(), filename)

def initialize_app_dirs() -> Dict[str, str]:
    """初始化应用目录并返回路径信息

    命令行入口开启文件日志时调用，确保日志和配置目录已创建。

    Returns:
        Dict[str, str]: 包含所有路径信息的字典
    """
    return {
        "app_name": get_app_name(),
        "app_dir": get_app_dir(),
        "logs_dir": get_logs_dir(),
        "config_dir": get_config_dir(),
    }
