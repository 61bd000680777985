"""pytest配置和fixtures"""

import os
import random
from typing import Callable, List

import pytest

# 设置测试环境变量
os.environ["LOG_LEVEL"] = "DEBUG"

from template_editor.models.file_tree import FileData, FileNode, FolderData, FolderNode, Node
from template_editor.services.tree_engine import FileTreeEngine
from template_editor.services.tree_identity import SequentialIdGenerator


@pytest.fixture(scope="function")
def id_generator() -> SequentialIdGenerator:
    """确定性的ID生成器"""
    return SequentialIdGenerator(prefix="test")


@pytest.fixture(scope="function")
def engine(id_generator) -> FileTreeEngine:
    """使用确定性ID的文件树引擎"""
    return FileTreeEngine(id_generator=id_generator, system_file_names=[".DS_Store", "Thumbs.db"])


def _make_file(node_id: str, name: str, content: str = "", language: str = "plaintext") -> FileNode:
    return FileNode(id=node_id, data=FileData(name=name, language=language, content=content))


def _make_folder(node_id: str, name: str, files: List[Node] = None) -> FolderNode:
    return FolderNode(id=node_id, data=FolderData(name=name, files=files or []))


@pytest.fixture(scope="function")
def sample_tree() -> List[Node]:
    """示例文件树

    dst/
    src/
      components/
        button.jsx
      index.js
    README.md
    """
    return [
        _make_folder("dst", "dst"),
        _make_folder("src", "src", [
            _make_folder("components", "components", [
                _make_file("button", "button.jsx", "export default Button;", "javascript"),
            ]),
            _make_file("index", "index.js", "console.log('hi');", "javascript"),
        ]),
        _make_file("readme", "README.md", "# Template", "markdown"),
    ]


@pytest.fixture(scope="function")
def random_tree_factory() -> Callable[[int, int], List[Node]]:
    """随机文件树生成器，返回 (seed, depth) -> tree"""
    
    def build(seed: int, depth: int) -> List[Node]:
        rng = random.Random(seed)
        counter = iter(range(1, 10 ** 6))
        
        def level(remaining: int) -> List[Node]:
            nodes: List[Node] = []
            for _ in range(rng.randint(1, 3)):
                name = "".join(rng.choice("abcXYZ") for _ in range(3))
                node_id = f"r-{next(counter)}"
                if remaining > 1 and rng.random() < 0.6:
                    nodes.append(_make_folder(node_id, name, level(remaining - 1)))
                else:
                    nodes.append(_make_file(node_id, name + ".txt", content=node_id))
            return nodes
        
        # 保证达到指定深度
        tree = level(depth)
        chain = tree
        for current in range(depth - 1):
            folder = _make_folder(f"deep-{current}", f"deep{current}")
            chain.append(folder)
            chain = folder.data.files
        chain.append(_make_file("deepest", "deepest.txt", "bottom"))
        return tree
    
    return build


@pytest.fixture
def make_file():
    """文件节点工厂"""
    return _make_file


@pytest.fixture
def make_folder():
    """文件夹节点工厂"""
    return _make_folder
