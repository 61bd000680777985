"""模板编辑器后端主应用"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.templates import router as templates_router
from .core.config import settings
from .core.logging import app_logger
from .middleware import PerformanceMiddleware
from .services.session_service import template_session_service


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    await template_session_service.initialize()
    app_logger.info(
        "Template editor backend started successfully",
        extra={"version": settings.app_version, "debug": settings.debug}
    )
    try:
        yield
    finally:
        await template_session_service.cleanup()
        app_logger.info("Template editor backend stopped")


# 创建FastAPI应用
app = FastAPI(
    title=settings.app_name,
    description="模板编辑器虚拟文件树API",
    version=settings.app_version,
    debug=settings.debug,
    lifespan=lifespan
)

# 添加CORS中间件
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID", "X-Process-Time"]
)
app.add_middleware(PerformanceMiddleware)


@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc: HTTPException):
    """HTTP异常处理器"""
    request_id = getattr(request.state, "request_id", "unknown")
    
    if exc.status_code >= 500:
        app_logger.error(f"HTTP exception occurred: {exc.detail}", extra={"request_id": request_id})
    else:
        app_logger.warning(f"Client error: {exc.detail}", extra={"request_id": request_id})
    
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.detail},
        headers={"X-Request-ID": request_id}
    )


# 注册API路由
app.include_router(templates_router)


@app.get("/health", include_in_schema=False)
async def health_check():
    """健康检查"""
    sessions = await template_session_service.list_sessions()
    return {
        "status": "healthy",
        "version": settings.app_version,
        "active_sessions": len(sessions)
    }


if __name__ == "__main__":
    import uvicorn
    
    uvicorn.run(
        "template_editor.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower()
    )
