"""文件树模型

文件与文件夹节点使用显式的 ``kind`` 标签区分。
"""

from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field


class NodeKind(str, Enum):
    """节点类型枚举"""
    FILE = "file"
    FOLDER = "folder"


class FileData(BaseModel):
    """文件数据"""
    name: str = Field(..., description="文件名")
    language: str = Field(default="", description="编辑器语言")
    content: str = Field(default="", description="文件内容")


class FileNode(BaseModel):
    """文件节点模型"""
    id: str = Field(..., description="节点ID")
    kind: Literal["file"] = Field(default="file", description="节点类型")
    data: FileData = Field(..., description="文件数据")
    
    @property
    def name(self) -> str:
        return self.data.name
    
    @property
    def is_folder(self) -> bool:
        return False


class FolderData(BaseModel):
    """文件夹数据"""
    name: str = Field(..., description="文件夹名")
    files: List["Node"] = Field(default_factory=list, description="子节点")


class FolderNode(BaseModel):
    """文件夹节点模型"""
    id: str = Field(..., description="节点ID")
    kind: Literal["folder"] = Field(default="folder", description="节点类型")
    data: FolderData = Field(..., description="文件夹数据")
    
    @property
    def name(self) -> str:
        return self.data.name
    
    @property
    def is_folder(self) -> bool:
        return True
    
    @property
    def children(self) -> List["Node"]:
        return self.data.files


Node = Annotated[Union[FileNode, FolderNode], Field(discriminator="kind")]
Tree = List[Node]

FolderData.model_rebuild()
FolderNode.model_rebuild()


class FilesState(BaseModel):
    """编辑器文件状态快照"""
    files: List[Node] = Field(default_factory=list, description="根级节点列表")
    open_file_id: Optional[str] = Field(None, alias="openFileId", description="当前打开的文件ID")
    
    class Config:
        populate_by_name = True


class TreeUpdate(BaseModel):
    """树操作产生的局部状态更新

    只合并显式设置过的字段：``open_file_id=None`` 表示清空打开的文件，
    未设置则保持原值。
    """
    files: List[Node] = Field(..., description="新的根级节点列表")
    open_file_id: Optional[str] = Field(None, alias="openFileId", description="新的打开文件ID")
    
    class Config:
        populate_by_name = True
    
    @property
    def new_file_id(self) -> Optional[str]:
        """新建文件的ID（仅 add_file 结果中设置）"""
        return self.open_file_id
    
    def changes(self) -> Dict[str, Any]:
        """返回需要合并到状态中的字段"""
        return {name: getattr(self, name) for name in self.model_fields_set}
    
    def apply_to(self, state: FilesState) -> FilesState:
        """把局部更新合并为新的状态快照"""
        return state.model_copy(update=self.changes())


class ExportedFile(BaseModel):
    """传输格式的文件节点（不含ID）"""
    kind: Literal["file"] = "file"
    data: FileData


class ExportedFolderData(BaseModel):
    """传输格式的文件夹数据"""
    name: str
    files: List["ExportedNode"] = Field(default_factory=list)


class ExportedFolder(BaseModel):
    """传输格式的文件夹节点（不含ID）"""
    kind: Literal["folder"] = "folder"
    data: ExportedFolderData


ExportedNode = Annotated[Union[ExportedFile, ExportedFolder], Field(discriminator="kind")]

ExportedFolderData.model_rebuild()
ExportedFolder.model_rebuild()
