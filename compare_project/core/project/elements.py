"""
Element names of the project file format.
"""

ROOT = "project"
PATHS = "paths"

LEFT = "left"
MIDDLE = "middle"
RIGHT = "right"
FILTER = "filter"
SUBFOLDERS = "subfolders"
LEFT_READONLY = "left-readonly"
MIDDLE_READONLY = "middle-readonly"
RIGHT_READONLY = "right-readonly"
UNPACKER = "unpacker"
PREDIFFER = "prediffer"
WHITE_SPACES = "white-spaces"
IGNORE_BLANK_LINES = "ignore-blank-lines"
IGNORE_CASE = "ignore-case"
IGNORE_CR_DIFF = "ignore-carriage-return-diff"
IGNORE_NUMBERS = "ignore-numbers"
IGNORE_CODEPAGE_DIFF = "ignore-codepage-diff"
IGNORE_COMMENT_DIFF = "ignore-comment-diff"
COMPARE_METHOD = "compare-method"

HIDDEN_LIST = "hidden-list"
HIDDEN_ITEM = "hidden-item"
