"""模板编辑会话服务 - 内存存储版本

每个会话持有一个 FilesStore，所有树操作都通过它串行化执行。
"""

import asyncio
import uuid
from threading import Lock
from typing import Any, Dict, List, Optional, Union

from ..core.config import settings
from ..core.exceptions import ResourceNotFoundError, SessionError
from ..models.actions import FilesAction
from ..models.file_tree import FilesState
from ..models.session import SessionStatus, TemplateSession
from .base import BaseService
from .files_reducer import FilesStore
from .tree_engine import FileTreeEngine, file_tree_engine
from .tree_serialization import export_tree, get_file_path


class TemplateSessionService(BaseService):
    """模板编辑会话服务"""
    
    def __init__(self, engine: Optional[FileTreeEngine] = None):
        super().__init__("template_session")
        self.engine = engine or file_tree_engine
        self.sessions: Dict[str, TemplateSession] = {}
        self.stores: Dict[str, FilesStore] = {}
        self._lock = Lock()  # 线程安全锁
        self._cleanup_task: Optional[asyncio.Task] = None
    
    async def _initialize(self):
        """初始化服务，启动过期会话清理任务"""
        self._cleanup_task = asyncio.create_task(self._periodic_cleanup())
        self.log_info("Template session service initialized (memory storage)")
    
    async def _cleanup(self):
        """停止清理任务并释放所有会话"""
        if self._cleanup_task:
            self._cleanup_task.cancel()
            try:
                await self._cleanup_task
            except asyncio.CancelledError:
                pass
            self._cleanup_task = None
        
        with self._lock:
            self.sessions.clear()
            self.stores.clear()
        self.log_info("Template session service cleaned up")
    
    async def create_session(self, files: Optional[List[Any]] = None) -> str:
        """创建新会话
        
        Args:
            files: 可选的传输格式文件树，载入时重新生成所有ID
            
        Returns:
            str: 会话ID
        """
        session_id = str(uuid.uuid4())
        
        with self._lock:
            if len(self.sessions) >= settings.max_sessions:
                raise SessionError("会话数量已达上限")
            
            tree = self.engine.import_tree(files) if files else []
            self.sessions[session_id] = TemplateSession(session_id=session_id)
            self.stores[session_id] = FilesStore(FilesState(files=tree), engine=self.engine)
        
        self.log_info("Session created successfully", session_id=session_id, root_items=len(tree))
        return session_id
    
    def _get_store(self, session_id: str) -> FilesStore:
        """获取会话对应的状态容器并刷新访问时间"""
        with self._lock:
            session = self.sessions.get(session_id)
            if session is None or session.status != SessionStatus.ACTIVE:
                raise ResourceNotFoundError(
                    f"Session not found: {session_id}",
                    resource_type="session",
                    resource_id=session_id
                )
            session.touch()
            return self.stores[session_id]
    
    async def get_session(self, session_id: str) -> Optional[TemplateSession]:
        """获取会话信息，不存在时返回 None"""
        return self.sessions.get(session_id)
    
    async def get_state(self, session_id: str) -> FilesState:
        """获取会话当前的文件状态"""
        return self._get_store(session_id).state
    
    async def get_history_size(self, session_id: str) -> int:
        return self._get_store(session_id).history_size
    
    async def dispatch(self, session_id: str, action: Union[FilesAction, dict]) -> FilesState:
        """对会话应用一个动作"""
        store = self._get_store(session_id)
        action_type = action.get("type") if isinstance(action, dict) else action.type
        async with self.performance_context("dispatch", session_id=session_id, action_type=action_type):
            state = store.dispatch(action)
        return state
    
    async def undo(self, session_id: str) -> bool:
        """撤销会话的上一次变更"""
        return self._get_store(session_id).undo()
    
    async def export_session(self, session_id: str) -> List[Dict[str, Any]]:
        """导出会话文件树（不含ID）"""
        return export_tree(self._get_store(session_id).files)
    
    async def get_file_path(self, session_id: str, node_id: str) -> Optional[str]:
        """获取会话中节点的路径"""
        return get_file_path(self._get_store(session_id).files, node_id)
    
    async def delete_session(self, session_id: str) -> bool:
        """删除会话"""
        with self._lock:
            session = self.sessions.pop(session_id, None)
            self.stores.pop(session_id, None)
        
        if session is None:
            self.log_warning("Session to delete not found", session_id=session_id)
            return False
        
        self.log_info("Session deleted", session_id=session_id)
        return True
    
    async def list_sessions(self) -> List[TemplateSession]:
        """列出所有会话"""
        with self._lock:
            return list(self.sessions.values())
    
    async def cleanup_expired_sessions(self) -> int:
        """清理超时未访问的会话
        
        Returns:
            int: 清理的会话数量
        """
        with self._lock:
            expired = [
                session_id for session_id, session in self.sessions.items()
                if session.is_expired(settings.session_timeout)
            ]
            for session_id in expired:
                self.sessions.pop(session_id).status = SessionStatus.EXPIRED
                self.stores.pop(session_id, None)
        
        if expired:
            self.log_info("Expired sessions cleaned up", count=len(expired))
        return len(expired)
    
    async def _periodic_cleanup(self):
        """定期清理过期会话"""
        while True:
            await asyncio.sleep(settings.cleanup_interval)
            try:
                await self.cleanup_expired_sessions()
            except Exception as e:
                self.log_error("Periodic session cleanup failed", e)


# 创建全局会话服务实例
template_session_service = TemplateSessionService()
