"""文件状态 reducer

把一次动作应用到状态快照上，返回新的快照；输入快照保持不变。
"""

from collections import deque
from threading import Lock
from typing import Deque, List, Optional, Union

from ..core.config import settings
from ..core.exceptions import ConfigurationError
from ..core.logging import get_logger
from ..models.actions import (
    AddItemAction,
    ChangeOpenFileContentAction,
    DeleteItemAction,
    FilesAction,
    MoveItemAction,
    OpenFileAction,
    RenameFolderAction,
    parse_action,
)
from ..models.file_tree import FilesState, Node
from .tree_engine import FileTreeEngine, file_tree_engine
from .tree_lookup import contains_node, find_node_by_id


logger = get_logger("file_tree.reducer")


def files_reducer(
    state: FilesState,
    action: Union[FilesAction, dict],
    engine: Optional[FileTreeEngine] = None
) -> FilesState:
    """根据动作计算新的文件状态

    动作没有带来任何变化时原样返回输入的 state 对象。
    """
    new_state = _reduce(state, action, engine or file_tree_engine)
    if new_state is not state and new_state == state:
        return state
    return new_state


def _reduce(state: FilesState, action: Union[FilesAction, dict], engine: FileTreeEngine) -> FilesState:
    if isinstance(action, dict):
        action = parse_action(action)
    
    if isinstance(action, AddItemAction):
        update = engine.add_item(state.files, action.data, action.parent_folder_id)
        if update is None:
            return state
        return update.apply_to(state)
    
    if isinstance(action, MoveItemAction):
        files = engine.move_item(state.files, action.item, action.new_folder_id)
        return state.model_copy(update={"files": files})
    
    if isinstance(action, RenameFolderAction):
        files = engine.rename_item(state.files, action.folder_id, action.new_name)
        return state.model_copy(update={"files": files})
    
    if isinstance(action, DeleteItemAction):
        # 删除打开的文件或其所在的文件夹都会清空 open_file_id
        target = find_node_by_id(state.files, action.item_id)
        is_file_open = target is not None and contains_node(target, state.open_file_id)
        update = engine.delete_item(state.files, action.item_id, is_file_open=is_file_open)
        return update.apply_to(state)
    
    if isinstance(action, OpenFileAction):
        return state.model_copy(update={"open_file_id": action.file_id})
    
    if isinstance(action, ChangeOpenFileContentAction):
        if state.open_file_id is None:
            logger.warning("没有打开的文件，忽略内容修改")
            return state
        files = engine.change_file_content(state.files, state.open_file_id, action.value)
        return state.model_copy(update={"files": files})
    
    raise TypeError(f"Unsupported action: {type(action).__name__}")


class FilesStore:
    """调用方持有的状态容器

    串行化所有 dispatch，并保留有限数量的历史快照用于撤销。
    """
    
    def __init__(
        self,
        state: Optional[FilesState] = None,
        engine: Optional[FileTreeEngine] = None,
        history_limit: Optional[int] = None
    ):
        self.engine = engine or file_tree_engine
        self._state = state or FilesState()
        limit = settings.history_limit if history_limit is None else history_limit
        if limit < 0:
            raise ConfigurationError(f"历史记录上限不能为负数: {limit}", config_key="history_limit")
        self._history: Deque[FilesState] = deque(maxlen=limit)
        self._lock = Lock()
    
    @property
    def state(self) -> FilesState:
        return self._state
    
    @property
    def files(self) -> List[Node]:
        return self._state.files
    
    @property
    def open_file_id(self) -> Optional[str]:
        return self._state.open_file_id
    
    @property
    def history_size(self) -> int:
        return len(self._history)
    
    def dispatch(self, action: Union[FilesAction, dict]) -> FilesState:
        """应用一个动作并返回新的当前快照"""
        with self._lock:
            new_state = files_reducer(self._state, action, self.engine)
            if new_state is not self._state:
                if self._history.maxlen:
                    self._history.append(self._state)
                self._state = new_state
            return self._state
    
    def undo(self) -> bool:
        """恢复上一个快照，没有历史时返回 False"""
        with self._lock:
            if not self._history:
                return False
            self._state = self._history.pop()
            return True
    
    def replace(self, state: FilesState) -> None:
        """整体替换当前快照（例如导入模板），并清空历史"""
        with self._lock:
            self._state = state
            self._history.clear()


__all__ = ["files_reducer", "FilesStore"]
