"""模板编辑会话服务单元测试"""

import pytest
import pytest_asyncio
from datetime import datetime, timedelta
from pydantic import ValidationError

from template_editor.core.config import settings
from template_editor.core.exceptions import ResourceNotFoundError, SessionError
from template_editor.models.session import SessionStatus
from template_editor.services.session_service import TemplateSessionService


SAMPLE_TRANSPORT = [
    {"kind": "folder", "data": {"name": "src", "files": [
        {"kind": "file", "data": {"name": "index.html", "language": "html", "content": "<html></html>"}},
    ]}},
    {"kind": "file", "data": {"name": "README.md", "language": "markdown", "content": ""}},
]


class TestTemplateSessionService:
    """会话服务测试类"""
    
    @pytest_asyncio.fixture
    async def service(self, engine):
        """创建测试用的会话服务实例"""
        service = TemplateSessionService(engine=engine)
        await service.initialize()
        yield service
        await service.cleanup()
    
    @pytest.mark.asyncio
    async def test_service_initialization(self, service):
        """测试服务初始化"""
        assert service.service_name == "template_session"
        assert service.initialized
        assert service.sessions == {}
        assert service._cleanup_task is not None
    
    @pytest.mark.asyncio
    async def test_create_empty_session(self, service):
        session_id = await service.create_session()
        
        assert len(session_id) == 36
        state = await service.get_state(session_id)
        assert state.files == []
        assert state.open_file_id is None
    
    @pytest.mark.asyncio
    async def test_create_session_with_files(self, service):
        """测试创建会话时载入文件树并生成新ID"""
        session_id = await service.create_session(SAMPLE_TRANSPORT)
        
        state = await service.get_state(session_id)
        assert [node.data.name for node in state.files] == ["src", "README.md"]
        assert state.files[0].id.startswith("test-")
        assert await service.export_session(session_id) == SAMPLE_TRANSPORT
    
    @pytest.mark.asyncio
    async def test_create_session_invalid_files(self, service):
        with pytest.raises(ValidationError):
            await service.create_session([{"kind": "unknown"}])
        assert service.sessions == {}
    
    @pytest.mark.asyncio
    async def test_create_session_max_limit(self, service):
        """测试会话数量限制"""
        original_max = settings.max_sessions
        try:
            settings.max_sessions = 2
            await service.create_session()
            await service.create_session()
            
            with pytest.raises(SessionError, match="会话数量已达上限"):
                await service.create_session()
        finally:
            settings.max_sessions = original_max
    
    @pytest.mark.asyncio
    async def test_dispatch_and_undo(self, service):
        session_id = await service.create_session(SAMPLE_TRANSPORT)
        src_id = (await service.get_state(session_id)).files[0].id
        
        state = await service.dispatch(session_id, {
            "type": "addItem",
            "data": {"name": "app.js", "language": "javascript", "content": ""},
            "parentFolderId": src_id,
        })
        
        assert await service.get_file_path(session_id, state.open_file_id) == "src/app.js"
        assert await service.get_history_size(session_id) == 1
        
        assert await service.undo(session_id) is True
        state = await service.get_state(session_id)
        assert state.open_file_id is None
        assert await service.export_session(session_id) == SAMPLE_TRANSPORT
    
    @pytest.mark.asyncio
    async def test_unknown_session(self, service):
        with pytest.raises(ResourceNotFoundError):
            await service.get_state("missing")
        with pytest.raises(ResourceNotFoundError):
            await service.dispatch("missing", {"type": "openFile", "fileId": None})
    
    @pytest.mark.asyncio
    async def test_delete_session(self, service):
        session_id = await service.create_session()
        
        assert await service.delete_session(session_id) is True
        assert await service.delete_session(session_id) is False
        assert await service.get_session(session_id) is None
    
    @pytest.mark.asyncio
    async def test_list_sessions(self, service):
        ids = {await service.create_session() for _ in range(3)}
        sessions = await service.list_sessions()
        assert {session.session_id for session in sessions} == ids
    
    @pytest.mark.asyncio
    async def test_cleanup_expired_sessions(self, service):
        """测试清理过期会话"""
        fresh_id = await service.create_session()
        stale_id = await service.create_session()
        stale = service.sessions[stale_id]
        service.sessions[stale_id].last_accessed = datetime.now() - timedelta(seconds=settings.session_timeout + 10)
        
        assert await service.cleanup_expired_sessions() == 1
        assert await service.get_session(stale_id) is None
        assert stale_id not in service.stores
        assert stale.status == SessionStatus.EXPIRED
        assert await service.get_session(fresh_id) is not None
    
    @pytest.mark.asyncio
    async def test_access_refreshes_session(self, service):
        session_id = await service.create_session()
        old = datetime.now() - timedelta(seconds=settings.session_timeout + 10)
        service.sessions[session_id].last_accessed = old
        
        await service.get_state(session_id)
        
        assert service.sessions[session_id].last_accessed > old
        assert await service.cleanup_expired_sessions() == 0
    
    @pytest.mark.asyncio
    async def test_cleanup_releases_sessions(self, engine):
        service = TemplateSessionService(engine=engine)
        await service.initialize()
        await service.create_session()
        await service.cleanup()
        
        assert service.sessions == {}
        assert not service.initialized
