"""模板文件树API路由"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from ..core.exceptions import ResourceNotFoundError, SessionError, ValidationError
from ..core.logging import performance_logger
from ..models.actions import parse_action
from ..services.session_service import template_session_service

router = APIRouter(prefix="/api/v1/templates/sessions", tags=["templates"])


class CreateSessionRequest(BaseModel):
    """创建会话请求"""
    files: List[Dict[str, Any]] = Field(default_factory=list, description="传输格式的文件树")


async def _state_content(session_id: str) -> Dict[str, Any]:
    state = await template_session_service.get_state(session_id)
    return {
        "session_id": session_id,
        "state": state.model_dump(mode="json", by_alias=True),
        "history_size": await template_session_service.get_history_size(session_id)
    }


def _not_found(e: ResourceNotFoundError) -> HTTPException:
    return HTTPException(status_code=404, detail=e.to_dict())


@router.post("/")
async def create_session(request: Optional[CreateSessionRequest] = None):
    """创建新的编辑会话，可附带要载入的文件树"""
    try:
        session_id = await template_session_service.create_session(request.files if request else None)
        
        performance_logger.info(f"Template session created: {session_id}")
        
        return JSONResponse(status_code=201, content=await _state_content(session_id))
        
    except SessionError as e:
        raise HTTPException(status_code=429, detail=e.to_dict())
    except PydanticValidationError as e:
        raise HTTPException(status_code=422, detail={"error": "文件树格式无效", "errors": e.errors(include_url=False, include_context=False)})


@router.get("/")
async def list_sessions():
    """列出所有编辑会话"""
    sessions = await template_session_service.list_sessions()
    return {
        "sessions": [session.to_dict() for session in sessions],
        "total_count": len(sessions)
    }


@router.get("/{session_id}")
async def get_session_state(session_id: str):
    """获取会话当前的文件状态"""
    try:
        return await _state_content(session_id)
    except ResourceNotFoundError as e:
        raise _not_found(e)


@router.post("/{session_id}/actions")
async def dispatch_action(session_id: str, payload: Dict[str, Any] = Body(...)):
    """对会话应用一个动作"""
    try:
        action = parse_action(payload)
    except PydanticValidationError as e:
        raise HTTPException(status_code=422, detail={"error": "动作格式无效", "errors": e.errors(include_url=False, include_context=False)})
    
    try:
        await template_session_service.dispatch(session_id, action)
        return await _state_content(session_id)
    except ResourceNotFoundError as e:
        raise _not_found(e)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.to_dict())


@router.post("/{session_id}/undo")
async def undo(session_id: str):
    """撤销上一次变更"""
    try:
        undone = await template_session_service.undo(session_id)
        content = await _state_content(session_id)
        content["undone"] = undone
        return content
    except ResourceNotFoundError as e:
        raise _not_found(e)


@router.get("/{session_id}/export")
async def export_session(session_id: str):
    """导出不含ID的文件树"""
    try:
        return {"files": await template_session_service.export_session(session_id)}
    except ResourceNotFoundError as e:
        raise _not_found(e)


@router.get("/{session_id}/path/{node_id}")
async def get_node_path(session_id: str, node_id: str):
    """获取节点的完整路径"""
    try:
        path = await template_session_service.get_file_path(session_id, node_id)
    except ResourceNotFoundError as e:
        raise _not_found(e)
    
    if path is None:
        raise HTTPException(status_code=404, detail={"error": "节点不存在", "node_id": node_id})
    return {"node_id": node_id, "path": path}


@router.delete("/{session_id}")
async def delete_session(session_id: str):
    """删除会话"""
    deleted = await template_session_service.delete_session(session_id)
    if not deleted:
        raise HTTPException(status_code=404, detail={"error": "会话不存在", "session_id": session_id})
    
    performance_logger.info(f"Template session deleted: {session_id}")
    return {"success": True, "message": "会话删除成功"}
