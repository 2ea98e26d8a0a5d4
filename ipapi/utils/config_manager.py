import os
import json
from typing import Any, Dict, Optional
from ipapi.utils.app_path import get_config_file_path
from ipapi.utils.logger import get_logger

logger = get_logger()

class ConfigManager:
    """配置管理器，负责读写settings.json"""
    
    def __init__(self, config_file: Optional[str] = None):
        """初始化配置管理器
        
        Args:
            config_file: 配置文件路径，为None时使用应用配置目录下的settings.json
        """
        self.config_file = config_file or get_config_file_path("settings.json")
    
    def save_settings(self, settings: Dict[str, Any]):
        """保存设置到配置文件"""
        with open(self.config_file, 'w', encoding='utf-8') as f:
            json.dump(settings, f, ensure_ascii=False, indent=4)
    
    def load_settings(self) -> Dict[str, Any]:
        """从配置文件加载设置"""
        if not os.path.exists(self.config_file):
            return {}
        
        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                settings = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"加载配置文件失败: {self.config_file}, {e}")
            return {}
        
        if not isinstance(settings, dict):
            logger.warning(f"配置文件格式无效，应为JSON对象: {self.config_file}")
            return {}
        return settings
