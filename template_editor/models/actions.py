"""文件树动作模型

每个动作对应编辑器中的一次离散用户意图，通过 ``type`` 字段区分。
"""

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter

from .file_tree import Node


class ActionBase(BaseModel):
    """动作基础模型"""
    
    class Config:
        populate_by_name = True


class AddItemAction(ActionBase):
    """添加文件或文件夹"""
    type: Literal["addItem"] = "addItem"
    data: Dict[str, Any] = Field(..., description="原始节点数据（含 files 字段即为文件夹）")
    parent_folder_id: Optional[str] = Field(None, alias="parentFolderId", description="父文件夹ID")


class MoveItemAction(ActionBase):
    """移动已有节点"""
    type: Literal["moveItem"] = "moveItem"
    item: Node = Field(..., description="被移动的节点")
    new_folder_id: Optional[str] = Field(None, alias="newFolderId", description="目标文件夹ID，为空表示根级")


class RenameFolderAction(ActionBase):
    """重命名节点（文件与文件夹均适用）"""
    type: Literal["renameFolder"] = "renameFolder"
    folder_id: str = Field(..., alias="folderId", description="节点ID")
    new_name: str = Field(..., alias="newName", description="新名称")


class DeleteItemAction(ActionBase):
    """删除节点"""
    type: Literal["deleteItem"] = "deleteItem"
    item_id: str = Field(..., alias="itemId", description="节点ID")


class OpenFileAction(ActionBase):
    """打开文件"""
    type: Literal["openFile"] = "openFile"
    file_id: Optional[str] = Field(None, alias="fileId", description="文件ID")


class ChangeOpenFileContentAction(ActionBase):
    """修改当前打开文件的内容"""
    type: Literal["changeOpenFileContent"] = "changeOpenFileContent"
    value: str = Field(..., description="新内容")


FilesAction = Annotated[
    Union[
        AddItemAction,
        MoveItemAction,
        RenameFolderAction,
        DeleteItemAction,
        OpenFileAction,
        ChangeOpenFileContentAction,
    ],
    Field(discriminator="type"),
]

_action_adapter = TypeAdapter(FilesAction)
_action_list_adapter = TypeAdapter(List[FilesAction])


def parse_action(payload: Any) -> FilesAction:
    """把原始字典解析为动作模型，未知类型抛出 pydantic.ValidationError"""
    return _action_adapter.validate_python(payload)


def parse_actions(payload: Any) -> List[FilesAction]:
    """批量解析动作"""
    return _action_list_adapter.validate_python(payload)
