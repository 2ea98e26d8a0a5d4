import os
import logging
import threading
from logging.handlers import RotatingFileHandler
from datetime import datetime
from typing import Optional
from ipapi.utils.app_path import get_app_name, get_logs_dir

# 自定义日志格式化器，将日志级别翻译成中文
class ChineseLogFormatter(logging.Formatter):
    """自定义日志格式化器，将日志级别翻译成中文"""

    # 日志级别中英文映射
    LEVEL_MAP = {
        'DEBUG': '调试',
        'INFO': '信息',
        'WARNING': '警告',
        'ERROR': '错误',
        'CRITICAL': '严重错误',
    }

    def format(self, record):
        # 只改写副本，避免影响同一记录的其他处理器
        record = logging.makeLogRecord(record.__dict__)
        if record.levelname in self.LEVEL_MAP:
            record.levelname = self.LEVEL_MAP[record.levelname]
        return super().format(record)

class Logger:
    """日志管理器单例类"""
    _instance: Optional['Logger'] = None
    _initialized = False
    _lock = threading.RLock()

    @classmethod
    def instance(cls) -> 'Logger':
        """获取Logger单例实例，线程安全"""
        with cls._lock:
            if cls._instance is None:
                cls._instance = cls()
            return cls._instance

    def __init__(self):
        """初始化Logger，只在第一次调用时执行"""
        with Logger._lock:
            if Logger._initialized:
                return

            self.logger = logging.getLogger(get_app_name())
            self.logger.setLevel(logging.DEBUG)
            # 避免日志重复输出
            self.logger.propagate = False

            self.formatter = ChineseLogFormatter('[%(asctime)s] [%(levelname)s] %(message)s')
            self.console_handler = None

            # 检查是否已有处理器
            if not self.logger.handlers:
                # 控制台日志处理器
                self.console_handler = logging.StreamHandler()
                self.console_handler.setFormatter(self.formatter)
                self.console_handler.setLevel(logging.INFO)
                self.logger.addHandler(self.console_handler)

            # 文件日志处理器 - 由调用方显式开启
            self.file_handler = None

            Logger._initialized = True

    def enable_file_logging(self, log_dir: Optional[str] = None) -> str:
        """开启文件日志，线程安全

        Args:
            log_dir: 日志目录，为None时使用应用日志目录

        Returns:
            str: 日志文件路径
        """
        with Logger._lock:
            if self.file_handler is not None:
                return self.file_handler.baseFilename

            log_dir = log_dir or get_logs_dir()
            # 每天一个日志文件
            log_file = os.path.join(log_dir, f"{datetime.now().strftime('%Y-%m-%d')}.log")

            self.file_handler = RotatingFileHandler(
                log_file,
                maxBytes=10*1024*1024,  # 10MB
                backupCount=5,
                encoding='utf-8'
            )
            self.file_handler.setFormatter(self.formatter)
            self.file_handler.setLevel(logging.DEBUG)
            self.logger.addHandler(self.file_handler)
            return log_file

    def set_console_level(self, level: int) -> None:
        """调整控制台日志级别"""
        if self.console_handler is not None:
            self.console_handler.setLevel(level)

    def debug(self, message):
        """记录调试级别日志"""
        self.logger.debug(message)

    def info(self, message):
        """记录信息级别日志"""
        self.logger.info(message)

    def warning(self, message):
        """记录警告级别日志"""
        self.logger.warning(message)

    def error(self, message):
        """记录错误级别日志"""
        self.logger.error(message)

    def critical(self, message):
        """记录严重错误级别日志"""
        self.logger.critical(message)


# 便捷函数，用于快速访问日志功能
def get_logger() -> Logger:
    """获取Logger实例的便捷方法"""
    return Logger.instance()
