"""编辑会话模型"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel, Field


class SessionStatus(str, Enum):
    """会话状态枚举"""
    ACTIVE = "active"
    EXPIRED = "expired"


class TemplateSession(BaseModel):
    """模板编辑会话信息"""
    
    session_id: str = Field(..., description="会话ID")
    created_at: datetime = Field(default_factory=datetime.now, description="创建时间")
    last_accessed: datetime = Field(default_factory=datetime.now, description="最后访问时间")
    status: SessionStatus = Field(default=SessionStatus.ACTIVE, description="会话状态")
    
    def is_expired(self, timeout: int) -> bool:
        """检查会话是否超过指定秒数未被访问"""
        return (datetime.now() - self.last_accessed).total_seconds() > timeout
    
    def touch(self) -> None:
        """更新最后访问时间"""
        self.last_accessed = datetime.now()
    
    def to_dict(self) -> Dict[str, Any]:
        """转换为字典"""
        return {
            "session_id": self.session_id,
            "created_at": self.created_at.isoformat(),
            "last_accessed": self.last_accessed.isoformat(),
            "status": self.status.value
        }
