"""Test utilities for the markweave test suite.

Shared visitor helpers for tests that walk parsed trees.
"""

from markweave.ast import NodeVisitor


class RecordingVisitor(NodeVisitor):
    """Visitor that records the name of every node kind it enters.

    Every method recurses into children, so a full walk records the whole
    tree in pre-order.
    """

    def __init__(self):
        self.visited: list[str] = []

    def _record(self, node):
        self.visited.append(type(node).__name__)
        self.visit_children(node)
        return len(self.visited)

    visit_document = _record
    visit_header = _record
    visit_paragraph = _record
    visit_list_paragraph = _record
    visit_block_quote = _record
    visit_code_block = _record
    visit_fenced_code_block = _record
    visit_horizontal_rule = _record
    visit_unordered_list = _record
    visit_ordered_list = _record
    visit_unordered_list_item = _record
    visit_ordered_list_item = _record
    visit_table = _record
    visit_table_header = _record
    visit_table_row = _record
    visit_table_cell = _record
    visit_text = _record
    visit_code = _record
    visit_link = _record
    visit_image = _record
    visit_bold = _record
    visit_italic = _record
    visit_strikethrough = _record
