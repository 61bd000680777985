"""节点标识与构造

为新节点分配唯一ID，并把原始（无ID）数据构造成文件/文件夹节点。
"""

import itertools
import uuid
from threading import Lock
from typing import Any, Collection, Dict, Mapping, Optional, Protocol

from pydantic import BaseModel

from ..core.config import settings
from ..core.logging import get_logger
from ..models.file_tree import FileData, FileNode, FolderData, FolderNode, Node, NodeKind


logger = get_logger("file_tree.identity")


class IdGenerator(Protocol):
    """节点ID生成器协议：每次调用返回一个新的唯一ID"""
    
    def __call__(self) -> str:
        ...


class UuidIdGenerator:
    """基于 uuid4 的ID生成器（默认）"""
    
    def __call__(self) -> str:
        return str(uuid.uuid4())


class SequentialIdGenerator:
    """确定性的顺序ID生成器，主要用于测试"""
    
    def __init__(self, prefix: Optional[str] = None, start: int = 1):
        self.prefix = prefix or settings.id_prefix
        self._counter = itertools.count(start)
        self._lock = Lock()
    
    def __call__(self) -> str:
        with self._lock:
            return f"{self.prefix}-{next(self._counter)}"


def as_mapping(data: Any) -> Dict[str, Any]:
    """把原始输入统一为字典

    节点形状的输入（``{id, kind, data}``）会被展开为 ``{kind, name, ...}``，
    原有的ID被丢弃。
    """
    if isinstance(data, BaseModel):
        raw = data.model_dump()
    elif isinstance(data, Mapping):
        raw = dict(data)
    else:
        raise TypeError(f"Unsupported node data: {type(data).__name__}")
    
    payload = raw.get("data")
    if isinstance(payload, Mapping):
        flattened = dict(payload)
        if raw.get("kind") is not None:
            flattened["kind"] = raw["kind"]
        return flattened
    return raw


def node_kind_of(data: Any) -> NodeKind:
    """判断原始数据描述的节点类型

    显式的 ``kind`` 优先；缺省时含 ``files`` 字段即为文件夹。
    """
    if isinstance(data, (FileNode, FileData)):
        return NodeKind.FILE
    if isinstance(data, (FolderNode, FolderData)):
        return NodeKind.FOLDER
    
    raw = data if isinstance(data, Mapping) else as_mapping(data)
    kind = raw.get("kind")
    if kind is not None:
        return NodeKind(kind)
    payload = raw.get("data")
    if isinstance(payload, Mapping):
        return NodeKind.FOLDER if "files" in payload else NodeKind.FILE
    return NodeKind.FOLDER if "files" in raw else NodeKind.FILE


def create_file(
    data: Any,
    id_generator: IdGenerator,
    system_file_names: Collection[str]
) -> Optional[FileNode]:
    """构造文件节点

    Args:
        data: ``{name, language, content}``
        id_generator: ID生成器
        system_file_names: 系统保留文件名
    
    Returns:
        新的文件节点；名称为系统保留文件名时返回 None
    """
    raw = as_mapping(data)
    name = raw["name"]
    if name in system_file_names:
        logger.info(f"忽略系统文件: {name}")
        return None
    
    return FileNode(
        id=id_generator(),
        data=FileData(
            name=name,
            language=raw.get("language") or "",
            content=raw.get("content") or ""
        )
    )


def create_folder(
    data: Any,
    id_generator: IdGenerator,
    system_file_names: Collection[str]
) -> FolderNode:
    """递归构造文件夹节点，丢弃保留文件名对应的子节点"""
    raw = as_mapping(data)
    children = []
    for child in raw.get("files") or []:
        node = build_node(child, id_generator, system_file_names)
        if node is not None:
            children.append(node)
    
    return FolderNode(
        id=id_generator(),
        data=FolderData(name=raw["name"], files=children)
    )


def build_node(
    data: Any,
    id_generator: IdGenerator,
    system_file_names: Collection[str]
) -> Optional[Node]:
    """按节点类型分派到 create_file / create_folder"""
    if node_kind_of(data) == NodeKind.FOLDER:
        return create_folder(data, id_generator, system_file_names)
    return create_file(data, id_generator, system_file_names)


default_id_generator = UuidIdGenerator()


__all__ = [
    "IdGenerator",
    "UuidIdGenerator",
    "SequentialIdGenerator",
    "as_mapping",
    "node_kind_of",
    "create_file",
    "create_folder",
    "build_node",
    "default_id_generator",
]
