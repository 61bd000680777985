"""日志系统模块

服务层与中间件通过 ``extra`` 传入会话ID、动作类型、耗时等上下文，
这里的格式化器会把这些字段以 ``key=value`` 的形式附加在消息之后。
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from .config import settings


DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
PERFORMANCE_FORMAT = "%(asctime)s - PERF - %(message)s"

# 按输出顺序排列的上下文字段
CONTEXT_FIELDS = (
    "request_id",
    "session_id",
    "action_type",
    "operation",
    "method",
    "url",
    "status_code",
    "duration",
    "process_time",
    "count",
    "root_items",
    "error_type",
)


class ContextFormatter(logging.Formatter):
    """附加上下文字段的日志格式化器"""

    def format(self, record):
        message = super().format(record)
        context = self.format_context(record)
        return f"{message} [{context}]" if context else message

    @staticmethod
    def format_context(record: logging.LogRecord) -> str:
        parts = []
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is None:
                continue
            if isinstance(value, float):
                value = f"{value:.3f}"
            parts.append(f"{field}={value}")
        return " ".join(parts)


class ColoredFormatter(ContextFormatter):
    """控制台用的带颜色格式化器"""

    COLORS = {
        'DEBUG': '\033[36m',     # 青色
        'INFO': '\033[32m',      # 绿色
        'WARNING': '\033[33m',   # 黄色
        'ERROR': '\033[31m',     # 红色
        'CRITICAL': '\033[35m',  # 紫色
    }
    RESET = '\033[0m'

    def format(self, record):
        # 复制记录，颜色码不能进入文件处理器
        record = logging.makeLogRecord(record.__dict__)
        log_color = self.COLORS.get(record.levelname, self.RESET)
        record.levelname = f"{log_color}{record.levelname}{self.RESET}"
        return super().format(record)


def _level_of(level: str) -> int:
    value = logging.getLevelName(level.upper())
    return value if isinstance(value, int) else logging.INFO


def setup_logger(
    name: str,
    level: str = "INFO",
    log_file: Optional[str] = None,
    format_string: str = DEFAULT_FORMAT
) -> logging.Logger:
    """设置日志记录器

    同名记录器只配置一次；控制台输出带颜色，文件输出为纯文本。
    未知的级别名按 INFO 处理。
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    log_level = _level_of(level)
    logger.setLevel(log_level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(ColoredFormatter(format_string))
    handlers = [console_handler]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding='utf-8')
        file_handler.setFormatter(ContextFormatter(format_string))
        handlers.append(file_handler)

    for handler in handlers:
        handler.setLevel(log_level)
        logger.addHandler(handler)

    return logger


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """获取日志记录器，级别与日志文件默认取配置"""
    return setup_logger(name, level or settings.log_level, settings.log_file)


# 请求与服务操作耗时
performance_logger = setup_logger(
    "performance",
    level="INFO",
    log_file=settings.log_file,
    format_string=PERFORMANCE_FORMAT
)

# 应用主日志记录器
app_logger = get_logger("template_editor")
