"""grammarbuild - parallel WebAssembly builds for tree-sitter grammars."""

__version__ = "0.3.0"
