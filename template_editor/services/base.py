"""服务层基础类"""

import logging
import time
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager

from ..core.config import settings
from ..core.exceptions import TemplateEditorException
from ..core.logging import get_logger, performance_logger


class BaseService(ABC):
    """服务基础类

    管理服务的生命周期（initialize/cleanup 可重复调用），
    并为日志统一附加服务名与调用方传入的上下文字段。
    """

    def __init__(self, service_name: str):
        self.service_name = service_name
        self.logger = get_logger(service_name)
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    async def initialize(self):
        if self._initialized:
            return
        await self._initialize()
        self._initialized = True
        self.log_info(f"{self.service_name} service initialized")

    async def cleanup(self):
        if not self._initialized:
            return
        await self._cleanup()
        self._initialized = False
        self.log_info(f"{self.service_name} service cleaned up")

    @abstractmethod
    async def _initialize(self):
        ...

    @abstractmethod
    async def _cleanup(self):
        ...

    @asynccontextmanager
    async def performance_context(self, operation: str, **context):
        """记录一次操作的耗时与结果

        编辑器异常（客户端输入导致）记为警告，其它异常记为错误；
        异常总是继续抛出。超过 slow_request_threshold 的操作记为警告。
        """
        name = f"{self.service_name}.{operation}"
        start_time = time.time()
        try:
            yield
        except TemplateEditorException as e:
            self.log_warning(f"Operation {name} rejected: {e.message}", error_type=type(e).__name__, **context)
            raise
        except Exception as e:
            self.log_error(f"Operation {name} failed", e, **context)
            raise
        finally:
            duration = time.time() - start_time
            level = logging.WARNING if duration > settings.slow_request_threshold else logging.INFO
            performance_logger.log(
                level,
                f"Operation {name} completed in {duration:.3f}s",
                extra={"operation": name, "duration": duration, **context}
            )

    def _log(self, level: int, message: str, exc_info: bool = False, **context):
        self.logger.log(level, message, extra={"service": self.service_name, **context}, exc_info=exc_info)

    def log_error(self, message: str, error: Exception, **context):
        """记录错误日志（带堆栈）"""
        self._log(logging.ERROR, f"{message}: {error}", exc_info=True, error_type=type(error).__name__, **context)

    def log_info(self, message: str, **context):
        self._log(logging.INFO, message, **context)

    def log_warning(self, message: str, **context):
        self._log(logging.WARNING, message, **context)


__all__ = ["BaseService"]
