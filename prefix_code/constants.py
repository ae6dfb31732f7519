"""
Global constants used throughout the package
"""

# Mathematical bold small epsilon (U+1D6C6). Stands for the empty codeword of
# the trivial code, so it may never be a symbol of an alphabet.
EMPTY_WORD = "\U0001d6c6"

DEFAULT_ALPHABET = "01"

# Returned by label lookups on absent codewords
NOT_FOUND = -1

# DFS encoding markers
DFS_NODE = "1"  # internal node, fans out into one child per symbol
DFS_LEAF = "0"  # codeword
