"""服务层

文件树引擎（构造、查找、排序、变更、序列化）以及编辑会话服务。
"""

from .tree_identity import (
    IdGenerator,
    UuidIdGenerator,
    SequentialIdGenerator,
    build_node,
    create_file,
    create_folder,
    node_kind_of,
)
from .tree_lookup import (
    iter_nodes,
    find_node_by_id,
    find_folder_path_by_key,
    find_parent_path_by_key,
    contains_node,
)
from .tree_ordering import compare_nodes, sort_siblings, is_sorted
from .tree_serialization import export_tree, import_tree, get_file_path
from .tree_engine import FileTreeEngine, file_tree_engine, clone_tree
from .files_reducer import files_reducer, FilesStore

__all__ = [
    "IdGenerator",
    "UuidIdGenerator",
    "SequentialIdGenerator",
    "build_node",
    "create_file",
    "create_folder",
    "node_kind_of",
    "iter_nodes",
    "find_node_by_id",
    "find_folder_path_by_key",
    "find_parent_path_by_key",
    "contains_node",
    "compare_nodes",
    "sort_siblings",
    "is_sorted",
    "export_tree",
    "import_tree",
    "get_file_path",
    "FileTreeEngine",
    "file_tree_engine",
    "clone_tree",
    "files_reducer",
    "FilesStore",
]
