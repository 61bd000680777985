"""兄弟节点排序

文件夹排在文件之前；同类节点按名称升序（区分大小写）。
"""

from functools import cmp_to_key
from typing import List, Sequence

from ..models.file_tree import FolderNode, Node


def compare_nodes(a: Node, b: Node) -> int:
    """兄弟节点比较函数，返回 -1 / 0 / 1"""
    if a.kind != b.kind:
        return -1 if isinstance(a, FolderNode) else 1
    if a.data.name < b.data.name:
        return -1
    if a.data.name > b.data.name:
        return 1
    return 0


def sort_siblings(nodes: List[Node], recursive: bool = True) -> List[Node]:
    """原地排序兄弟列表，默认递归排序每个子文件夹"""
    nodes.sort(key=cmp_to_key(compare_nodes))
    if recursive:
        for node in nodes:
            if isinstance(node, FolderNode):
                sort_siblings(node.data.files)
    return nodes


def is_sorted(tree: Sequence[Node]) -> bool:
    """递归检查每一层兄弟列表是否满足排序约束"""
    for left, right in zip(tree, tree[1:]):
        if compare_nodes(left, right) > 0:
            return False
    return all(
        is_sorted(node.data.files)
        for node in tree
        if isinstance(node, FolderNode)
    )


__all__ = ["compare_nodes", "sort_siblings", "is_sorted"]
