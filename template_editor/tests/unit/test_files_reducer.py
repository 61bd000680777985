"""文件状态 reducer 单元测试"""

import pytest
from pydantic import ValidationError

from template_editor.core.exceptions import ConfigurationError
from template_editor.models.actions import AddItemAction, OpenFileAction
from template_editor.models.file_tree import FilesState
from template_editor.services.files_reducer import FilesStore, files_reducer
from template_editor.services.tree_lookup import find_node_by_id
from template_editor.services.tree_serialization import export_tree


@pytest.fixture
def state(sample_tree):
    """示例状态：打开 index.js"""
    return FilesState(files=sample_tree, open_file_id="index")


class TestFilesReducer:
    """reducer 测试"""
    
    def test_add_file_opens_it(self, state, engine):
        new_state = files_reducer(
            state,
            {"type": "addItem", "data": {"name": "a.txt", "language": "", "content": ""}, "parentFolderId": "dst"},
            engine,
        )
        
        assert new_state.open_file_id == "test-1"
        assert find_node_by_id(new_state.files, "dst").data.files[0].id == "test-1"
        assert state.open_file_id == "index"
    
    def test_add_folder_keeps_open_file(self, state, engine):
        new_state = files_reducer(state, AddItemAction(data={"name": "lib", "files": []}), engine)
        assert new_state.open_file_id == "index"
        assert [node.data.name for node in new_state.files][:2] == ["dst", "lib"]
    
    def test_add_reserved_returns_same_state(self, state, engine):
        assert files_reducer(state, {"type": "addItem", "data": {"name": ".DS_Store"}}, engine) is state
    
    def test_move_item(self, state, engine):
        item = find_node_by_id(state.files, "readme").model_dump()
        new_state = files_reducer(state, {"type": "moveItem", "item": item, "newFolderId": "dst"}, engine)
        
        assert [node.id for node in find_node_by_id(new_state.files, "dst").data.files] == ["readme"]
        assert [node.id for node in new_state.files] == ["dst", "src"]
    
    def test_rename(self, state, engine):
        new_state = files_reducer(state, {"type": "renameFolder", "folderId": "src", "newName": "app"}, engine)
        assert find_node_by_id(new_state.files, "src").data.name == "app"
        assert [node.data.name for node in new_state.files] == ["app", "dst", "README.md"]
    
    def test_delete_open_file_clears(self, state, engine):
        """测试删除打开的文件时清空 open_file_id"""
        new_state = files_reducer(state, {"type": "deleteItem", "itemId": "index"}, engine)
        
        assert new_state.open_file_id is None
        assert find_node_by_id(new_state.files, "index") is None
    
    def test_delete_ancestor_of_open_file_clears(self, state, engine):
        new_state = files_reducer(state, {"type": "deleteItem", "itemId": "src"}, engine)
        assert new_state.open_file_id is None
    
    def test_delete_other_keeps_open(self, state, engine):
        new_state = files_reducer(state, {"type": "deleteItem", "itemId": "readme"}, engine)
        assert new_state.open_file_id == "index"
    
    def test_open_file(self, state, engine):
        new_state = files_reducer(state, OpenFileAction(file_id="readme"), engine)
        
        assert new_state.open_file_id == "readme"
        assert new_state.files is state.files
    
    def test_change_open_file_content(self, state, engine):
        new_state = files_reducer(state, {"type": "changeOpenFileContent", "value": "let x = 1;"}, engine)
        
        assert find_node_by_id(new_state.files, "index").data.content == "let x = 1;"
        assert find_node_by_id(state.files, "index").data.content == "console.log('hi');"
    
    def test_change_content_without_open_file(self, sample_tree, engine):
        state = FilesState(files=sample_tree)
        assert files_reducer(state, {"type": "changeOpenFileContent", "value": "x"}, engine) is state
    
    def test_unknown_action(self, state, engine):
        with pytest.raises(ValidationError):
            files_reducer(state, {"type": "explode"}, engine)
    
    def test_default_engine(self, state):
        new_state = files_reducer(state, {"type": "addItem", "data": {"name": "b.txt"}})
        assert new_state.open_file_id is not None
        assert len(new_state.open_file_id) == 36


class TestFilesStore:
    """状态容器测试"""
    
    def test_initial_state(self):
        store = FilesStore()
        assert store.files == []
        assert store.open_file_id is None
        assert store.history_size == 0
    
    def test_dispatch_and_undo(self, engine):
        store = FilesStore(engine=engine)
        store.dispatch({"type": "addItem", "data": {"name": "src", "files": []}})
        store.dispatch({"type": "addItem", "data": {"name": "a.txt"}, "parentFolderId": "test-1"})
        
        assert export_tree(store.files) == [
            {"kind": "folder", "data": {"name": "src", "files": [
                {"kind": "file", "data": {"name": "a.txt", "language": "", "content": ""}},
            ]}},
        ]
        assert store.open_file_id == "test-2"
        assert store.history_size == 2
        
        assert store.undo() is True
        assert export_tree(store.files) == [{"kind": "folder", "data": {"name": "src", "files": []}}]
        assert store.open_file_id is None
        
        assert store.undo() is True
        assert store.files == []
        assert store.undo() is False
    
    def test_noop_dispatch_not_recorded(self, engine):
        store = FilesStore(engine=engine)
        store.dispatch({"type": "addItem", "data": {"name": "Thumbs.db"}})
        assert store.history_size == 0
    
    @pytest.mark.parametrize("action", [
        {"type": "renameFolder", "folderId": "missing", "newName": "x"},
        {"type": "moveItem", "item": {"id": "missing", "kind": "file", "data": {"name": "x.js"}}, "newFolderId": "dst"},
        {"type": "moveItem", "item": {"id": "src", "kind": "folder", "data": {"name": "src", "files": []}}, "newFolderId": "components"},
        {"type": "deleteItem", "itemId": "missing"},
        {"type": "openFile", "fileId": "index"},
        {"type": "changeOpenFileContent", "value": "console.log('hi');"},
    ])
    def test_unchanged_state_not_recorded(self, engine, sample_tree, action):
        """测试没有产生变化的动作不占用撤销历史"""
        store = FilesStore(FilesState(files=sample_tree, open_file_id="index"), engine=engine)
        before = store.state
        
        assert store.dispatch(action) is before
        assert store.history_size == 0
        assert store.undo() is False
    
    def test_reducer_returns_input_when_unchanged(self, state, engine):
        new_state = files_reducer(state, {"type": "renameFolder", "folderId": "missing", "newName": "x"}, engine)
        assert new_state is state
    
    def test_negative_history_limit(self, engine):
        with pytest.raises(ConfigurationError) as exc_info:
            FilesStore(engine=engine, history_limit=-1)
        assert exc_info.value.details == {"config_key": "history_limit"}
    
    def test_history_limit(self, engine):
        store = FilesStore(engine=engine, history_limit=2)
        for index in range(5):
            store.dispatch({"type": "addItem", "data": {"name": f"{index}.txt"}})
        assert store.history_size == 2
        assert len(store.files) == 5
    
    def test_history_disabled(self, engine):
        store = FilesStore(engine=engine, history_limit=0)
        store.dispatch({"type": "addItem", "data": {"name": "a.txt"}})
        assert store.history_size == 0
        assert store.undo() is False
    
    def test_replace_clears_history(self, engine, sample_tree):
        store = FilesStore(engine=engine)
        store.dispatch({"type": "addItem", "data": {"name": "a.txt"}})
        store.replace(FilesState(files=sample_tree))
        
        assert store.history_size == 0
        assert store.files == sample_tree
    
    def test_prior_snapshot_untouched(self, engine, sample_tree):
        """测试旧快照在后续操作后保持不变"""
        store = FilesStore(FilesState(files=sample_tree, open_file_id="index"), engine=engine)
        first = store.state
        before = export_tree(first.files)
        
        store.dispatch({"type": "changeOpenFileContent", "value": "changed"})
        store.dispatch({"type": "moveItem", "item": {"id": "index", "kind": "file", "data": {"name": "index.js"}}, "newFolderId": "dst"})
        store.dispatch({"type": "deleteItem", "itemId": "components"})
        
        assert export_tree(first.files) == before
        assert first.open_file_id == "index"
