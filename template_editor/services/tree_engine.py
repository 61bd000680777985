"""文件树变更引擎

每个操作接收一个树快照，在其深拷贝上完成修改并返回新的快照，
输入快照永远不会被修改。找不到目标时操作退化为无操作，返回原树。
"""

from typing import Any, Collection, List, Optional, Sequence

from pydantic import BaseModel

from ..core.config import settings
from ..core.exceptions import ValidationError
from ..core.logging import get_logger
from ..models.file_tree import FileNode, FolderNode, Node, NodeKind, TreeUpdate
from .tree_identity import (
    IdGenerator,
    create_file,
    create_folder,
    default_id_generator,
    node_kind_of,
)
from .tree_lookup import contains_node, find_folder_path_by_key, find_node_by_id, iter_nodes
from .tree_ordering import sort_siblings
from .tree_serialization import import_tree


def clone_tree(tree: Sequence[Node]) -> List[Node]:
    """深拷贝整棵树"""
    return [node.model_copy(deep=True) for node in tree]


def node_id_of(item: Any) -> Optional[str]:
    """从节点、字典或ID字符串中取出节点ID"""
    if item is None or isinstance(item, str):
        return item
    if isinstance(item, BaseModel):
        return getattr(item, "id", None)
    return item.get("id")


def _siblings_of(files: List[Node], path: List[Node]) -> List[Node]:
    """路径末端节点所在的兄弟列表"""
    if len(path) > 1:
        return path[-2].data.files
    return files


def _resolve_children(files: List[Node], folder_id: Optional[str]) -> Optional[List[Node]]:
    """解析插入目标列表：为空表示根级；目标不存在或不是文件夹时返回 None"""
    if folder_id is None:
        return files
    folder = find_node_by_id(files, folder_id)
    if not isinstance(folder, FolderNode):
        return None
    return folder.data.files


def _detach(files: List[Node], node_id: str) -> Optional[Node]:
    """从（已拷贝的）树中摘除节点并返回它"""
    path = find_folder_path_by_key(files, node_id)
    if path is None:
        return None
    
    target = path[-1]
    siblings = _siblings_of(files, path)
    for index, node in enumerate(siblings):
        if node is target:
            del siblings[index]
            break
    return target


class FileTreeEngine:
    """文件树变更引擎

    Args:
        id_generator: 节点ID生成器，默认使用 uuid4
        system_file_names: 创建时静默忽略的文件名，默认取配置
    """
    
    def __init__(
        self,
        id_generator: Optional[IdGenerator] = None,
        system_file_names: Optional[Collection[str]] = None
    ):
        self.id_generator = id_generator or default_id_generator
        self.system_file_names = frozenset(
            settings.system_file_names if system_file_names is None else system_file_names
        )
        self.logger = get_logger("file_tree")
    
    # ------------------------------------------------------------------
    # 构造
    # ------------------------------------------------------------------
    
    def create_file(self, data: Any) -> Optional[FileNode]:
        return create_file(data, self.id_generator, self.system_file_names)
    
    def create_folder(self, data: Any) -> FolderNode:
        return create_folder(data, self.id_generator, self.system_file_names)
    
    def import_tree(self, transport: Any) -> List[Node]:
        """从传输格式载入并分配新ID"""
        return import_tree(transport, self.id_generator)
    
    # ------------------------------------------------------------------
    # 变更操作
    # ------------------------------------------------------------------
    
    def add_file(
        self,
        tree: Sequence[Node],
        file_data: Any,
        parent_folder_id: Optional[str] = None
    ) -> Optional[TreeUpdate]:
        """添加文件
        
        Returns:
            TreeUpdate，其中 open_file_id 为新文件ID；
            文件名为系统保留名或父文件夹不存在时返回 None
        """
        node = self.create_file(file_data)
        if node is None:
            return None
        
        files = clone_tree(tree)
        siblings = _resolve_children(files, parent_folder_id)
        if siblings is None:
            self.logger.warning(f"添加文件失败，父文件夹不存在: {parent_folder_id}")
            return None
        
        siblings.append(node)
        sort_siblings(siblings)
        self.logger.debug(f"已添加文件: {node.data.name} ({node.id})")
        return TreeUpdate(files=files, open_file_id=node.id)
    
    def add_folder(
        self,
        tree: Sequence[Node],
        folder_data: Any,
        parent_folder_id: Optional[str] = None
    ) -> List[Node]:
        """添加文件夹

        已带ID的文件夹（例如移动中重新插入的子树）保持原样，
        其中任何ID已存在于树中时不做修改；否则从原始数据递归构造新子树。
        """
        if isinstance(folder_data, FolderNode):
            node = folder_data.model_copy(deep=True)
        elif isinstance(folder_data, dict) and folder_data.get("id") is not None:
            node = FolderNode.model_validate({**folder_data, "kind": "folder"})
        else:
            node = self.create_folder(folder_data)

        seen = {existing.id for existing in iter_nodes(tree)}
        duplicates = []
        for child in iter_nodes([node]):
            if child.id in seen:
                duplicates.append(child.id)
            seen.add(child.id)
        if duplicates:
            self.logger.warning(f"添加文件夹失败，ID已存在: {', '.join(duplicates)}")
            return list(tree)

        files = clone_tree(tree)
        siblings = _resolve_children(files, parent_folder_id)
        if siblings is None:
            self.logger.warning(f"添加文件夹失败，父文件夹不存在: {parent_folder_id}")
            return list(tree)
        
        siblings.append(node)
        sort_siblings(siblings)
        self.logger.debug(f"已添加文件夹: {node.data.name} ({node.id})")
        return files
    
    def add_item(
        self,
        tree: Sequence[Node],
        data: Any,
        parent_folder_id: Optional[str] = None
    ) -> Optional[TreeUpdate]:
        """按数据类型添加文件或文件夹

        Raises:
            ValidationError: 原始数据缺少名称、类型未知或结构无效
        """
        try:
            if node_kind_of(data) == NodeKind.FOLDER:
                return TreeUpdate(files=self.add_folder(tree, data, parent_folder_id))
            return self.add_file(tree, data, parent_folder_id)
        except KeyError as e:
            raise ValidationError(f"节点数据缺少字段: {e.args[0]}", field=str(e.args[0]))
        except (TypeError, ValueError) as e:
            raise ValidationError(f"节点数据无效: {e}", value=data)
    
    def rename_item(self, tree: Sequence[Node], target_id: str, new_name: str) -> List[Node]:
        """重命名文件或文件夹，并重新排序其所在的兄弟列表"""
        files = clone_tree(tree)
        path = find_folder_path_by_key(files, target_id)
        if path is None:
            self.logger.warning(f"重命名失败，节点不存在: {target_id}")
            return list(tree)
        
        path[-1].data.name = new_name
        sort_siblings(_siblings_of(files, path), recursive=False)
        self.logger.debug(f"已重命名节点: {target_id} -> {new_name}")
        return files
    
    rename_folder = rename_item
    
    def delete_item(
        self,
        tree: Sequence[Node],
        target_id: str,
        is_file_open: bool = False
    ) -> TreeUpdate:
        """删除节点（文件夹连同整个子树）

        is_file_open 为真时结果中显式设置 open_file_id=None。
        """
        files = clone_tree(tree)
        removed = _detach(files, target_id)
        if removed is None:
            self.logger.warning(f"删除失败，节点不存在: {target_id}")
            return TreeUpdate(files=list(tree))
        
        self.logger.debug(f"已删除节点: {removed.data.name} ({target_id})")
        if is_file_open:
            return TreeUpdate(files=files, open_file_id=None)
        return TreeUpdate(files=files)
    
    def move_item(
        self,
        tree: Sequence[Node],
        item: Any,
        new_parent_folder_id: Optional[str] = None
    ) -> List[Node]:
        """移动节点：先摘除再插入同一个节点，保留其所有ID

        目标文件夹不存在、或是被移动节点本身及其子孙时不做任何修改。
        """
        item_id = node_id_of(item)
        source_path = find_folder_path_by_key(tree, item_id)
        if source_path is None:
            self.logger.warning(f"移动失败，节点不存在: {item_id}")
            return list(tree)
        
        if contains_node(source_path[-1], new_parent_folder_id):
            self.logger.warning(f"移动失败，不能移动到自身或其子文件夹: {item_id} -> {new_parent_folder_id}")
            return list(tree)
        
        if new_parent_folder_id is not None and not isinstance(
            find_node_by_id(tree, new_parent_folder_id), FolderNode
        ):
            self.logger.warning(f"移动失败，目标文件夹不存在: {new_parent_folder_id}")
            return list(tree)
        
        files = clone_tree(tree)
        moved = _detach(files, item_id)
        siblings = _resolve_children(files, new_parent_folder_id)
        siblings.append(moved)
        sort_siblings(siblings)
        self.logger.debug(f"已移动节点: {item_id} -> {new_parent_folder_id or '<root>'}")
        return files
    
    def change_file_content(self, tree: Sequence[Node], file_id: Optional[str], new_content: str) -> List[Node]:
        """替换文件内容，名称、语言与ID不变"""
        files = clone_tree(tree)
        node = find_node_by_id(files, file_id)
        if not isinstance(node, FileNode):
            self.logger.warning(f"修改内容失败，文件不存在: {file_id}")
            return list(tree)
        
        node.data.content = new_content
        return files


# 默认引擎实例
file_tree_engine = FileTreeEngine()


__all__ = [
    "clone_tree",
    "node_id_of",
    "FileTreeEngine",
    "file_tree_engine",
]
