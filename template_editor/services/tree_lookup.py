"""文件树遍历与查找

所有查找都是深度优先，按兄弟列表当前顺序遍历；找不到时返回 None。
"""

from typing import Iterator, List, Optional, Sequence

from ..models.file_tree import FolderNode, Node


def iter_nodes(tree: Sequence[Node]) -> Iterator[Node]:
    """深度优先（先序）遍历所有节点"""
    for node in tree:
        yield node
        if isinstance(node, FolderNode):
            yield from iter_nodes(node.data.files)


def find_node_by_id(tree: Sequence[Node], node_id: Optional[str]) -> Optional[Node]:
    """在整棵树中按ID查找节点"""
    if node_id is None:
        return None
    
    for node in tree:
        if node.id == node_id:
            return node
        if isinstance(node, FolderNode):
            found = find_node_by_id(node.data.files, node_id)
            if found is not None:
                return found
    return None


def find_folder_path_by_key(tree: Sequence[Node], node_id: Optional[str]) -> Optional[List[Node]]:
    """返回从根到目标节点（含目标本身）的祖先路径

    路径长度为 1 表示目标位于根级；长度为 N 时第 N-2 个元素是直接父文件夹。
    """
    if node_id is None:
        return None
    
    for node in tree:
        if node.id == node_id:
            return [node]
        if isinstance(node, FolderNode):
            sub_path = find_folder_path_by_key(node.data.files, node_id)
            if sub_path is not None:
                return [node] + sub_path
    return None


def find_parent_path_by_key(tree: Sequence[Node], node_id: Optional[str]) -> Optional[List[Node]]:
    """返回到目标父节点为止的路径（不含目标）；目标在根级时为空列表"""
    path = find_folder_path_by_key(tree, node_id)
    if path is None:
        return None
    return path[:-1]


def contains_node(root: Node, node_id: Optional[str]) -> bool:
    """判断 node_id 是否为 root 本身或其子孙节点"""
    if node_id is None:
        return False
    return find_node_by_id([root], node_id) is not None


__all__ = [
    "iter_nodes",
    "find_node_by_id",
    "find_folder_path_by_key",
    "find_parent_path_by_key",
    "contains_node",
]
