"""模板编辑器核心模块

包含应用程序的核心功能：
- 配置管理
- 日志系统
- 异常处理
"""

from .config import settings
from .logging import get_logger, performance_logger
from .exceptions import TemplateEditorException

__all__ = [
    'settings',
    'get_logger',
    'performance_logger',
    'TemplateEditorException'
]
