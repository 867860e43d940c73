"""Common literal values used across quire.

These constants keep the default manuscript skeleton and file names in one
place so the scaffold helper, the CLI, and tests share the same values.
Intended for internal use within the quire package.

Examples
--------
>>> from quire import _constants
>>> _constants.DEFAULT_CHAPTER_SCAFFOLD.startswith("## 第一章")
True
>>> _constants.DEFAULT_CONFIG_FILENAME
'quire.yaml'
"""

DEFAULT_CONFIG_FILENAME = "quire.yaml"

SHORT_MANUSCRIPT_LENGTH = 50

DEFAULT_CHAPTER_SCAFFOLD = (
    "## 第一章\n\nここに第一章の内容を記述してください。\n\n"
    "## 第二章\n\nここに第二章の内容を記述してください。\n\n"
    "## 第三章\n\nここに第三章の内容を記述してください。\n\n"
    "## 第四章\n\nここに第四章の内容を記述してください。\n"
)
