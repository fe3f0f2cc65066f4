"""File tree model and the operations bound in the tree modes."""

from .model import ClipboardMode, FileTree, SortKey, TreeClipboard, TreeItem, TreeNode
from .operations import TreeOperations

__all__ = [
    "ClipboardMode",
    "FileTree",
    "SortKey",
    "TreeClipboard",
    "TreeItem",
    "TreeNode",
    "TreeOperations",
]
