"""应用程序配置模块"""

from typing import List, Optional
from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """应用程序设置"""
    
    # 应用基础配置
    app_name: str = "Template Editor"
    app_version: str = "1.0.0"
    debug: bool = Field(default=False, env="DEBUG")
    
    # 服务器配置
    host: str = Field(default="0.0.0.0", env="HOST")
    port: int = Field(default=8000, env="PORT")
    allowed_origins: list = Field(default=["http://localhost:3000", "http://127.0.0.1:3000"], env="ALLOWED_ORIGINS")  # CORS允许的源
    
    # 日志配置
    log_level: str = Field(default="INFO", env="LOG_LEVEL")
    log_file: Optional[str] = Field(default=None, env="LOG_FILE")
    
    # 文件树配置
    system_file_names: List[str] = Field(
        default=[".DS_Store", "Thumbs.db", "desktop.ini"],
        env="SYSTEM_FILE_NAMES"
    )  # 创建时静默忽略的系统文件名
    id_prefix: str = Field(default="node", env="ID_PREFIX")  # 顺序ID生成器前缀
    history_limit: int = Field(default=50, env="HISTORY_LIMIT")  # 每个会话保留的历史快照数
    
    # 性能配置
    slow_request_threshold: float = Field(
        default=1.0,
        env="SLOW_REQUEST_THRESHOLD"
    )
    
    # 会话配置
    session_timeout: int = Field(default=3600, env="SESSION_TIMEOUT")  # 1小时
    max_sessions: int = Field(default=100, env="MAX_SESSIONS")  # 最大会话数
    cleanup_interval: int = Field(default=300, env="CLEANUP_INTERVAL")  # 清理间隔，5分钟
    
    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"
    
    def is_system_file_name(self, name: str) -> bool:
        """检查是否为系统保留文件名"""
        return name in self.system_file_names


# 创建全局设置实例
settings = Settings()
