"""模板编辑器后端

虚拟文件树引擎及其编辑会话服务。
"""

__version__ = "1.0.0"
