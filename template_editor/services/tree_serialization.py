"""文件树序列化

导出时去掉所有节点ID，导入时为每个节点重新生成ID。
"""

from typing import Any, Dict, List, Optional, Sequence

from pydantic import TypeAdapter

from ..models.file_tree import (
    ExportedFolder,
    ExportedNode,
    FileNode,
    FolderData,
    FolderNode,
    Node,
)
from .tree_identity import IdGenerator
from .tree_lookup import find_folder_path_by_key


_transport_adapter = TypeAdapter(List[ExportedNode])


def export_node(node: Node) -> Dict[str, Any]:
    """导出单个节点（递归去除ID）"""
    if isinstance(node, FolderNode):
        return {
            "kind": node.kind,
            "data": {
                "name": node.data.name,
                "files": [export_node(child) for child in node.data.files]
            }
        }
    return {"kind": node.kind, "data": node.data.model_dump()}


def export_tree(tree: Sequence[Node]) -> List[Dict[str, Any]]:
    """导出为不含ID的传输格式"""
    return [export_node(node) for node in tree]


def parse_transport_tree(transport: Any) -> List[ExportedNode]:
    """校验传输格式，格式不符时抛出 pydantic.ValidationError"""
    return _transport_adapter.validate_python(transport)


def _import_node(node: ExportedNode, id_generator: IdGenerator) -> Node:
    if isinstance(node, ExportedFolder):
        return FolderNode(
            id=id_generator(),
            data=FolderData(
                name=node.data.name,
                files=[_import_node(child, id_generator) for child in node.data.files]
            )
        )
    return FileNode(id=id_generator(), data=node.data.model_copy())


def import_tree(transport: Any, id_generator: IdGenerator) -> List[Node]:
    """从传输格式载入，为每个节点生成新ID，数据原样保留"""
    return [_import_node(node, id_generator) for node in parse_transport_tree(transport)]


def get_file_path(tree: Sequence[Node], node_id: Optional[str]) -> Optional[str]:
    """返回节点的 ``/`` 分隔路径；ID为空或不存在时返回 None"""
    if node_id is None:
        return None
    
    path = find_folder_path_by_key(tree, node_id)
    if path is None:
        return None
    return "/".join(node.data.name for node in path)


__all__ = [
    "export_node",
    "export_tree",
    "parse_transport_tree",
    "import_tree",
    "get_file_path",
]
