"""
A tree-walking interpreter for a small Lox-family scripting language.
"""
