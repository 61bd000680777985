"""数据模型"""

from .file_tree import (
    NodeKind,
    FileData,
    FileNode,
    FolderData,
    FolderNode,
    Node,
    Tree,
    FilesState,
    TreeUpdate,
    ExportedFile,
    ExportedFolder,
    ExportedFolderData,
    ExportedNode,
)
from .actions import (
    AddItemAction,
    MoveItemAction,
    RenameFolderAction,
    DeleteItemAction,
    OpenFileAction,
    ChangeOpenFileContentAction,
    FilesAction,
    parse_action,
    parse_actions,
)

__all__ = [
    "NodeKind",
    "FileData",
    "FileNode",
    "FolderData",
    "FolderNode",
    "Node",
    "Tree",
    "FilesState",
    "TreeUpdate",
    "ExportedFile",
    "ExportedFolder",
    "ExportedFolderData",
    "ExportedNode",
    "AddItemAction",
    "MoveItemAction",
    "RenameFolderAction",
    "DeleteItemAction",
    "OpenFileAction",
    "ChangeOpenFileContentAction",
    "FilesAction",
    "parse_action",
    "parse_actions",
]
