"""
High-level use cases for userstore.

Each service orchestrates repositories to implement an operation (list, add,
remove, find). The CLI should call these services instead of manipulating
the JSON file directly.
"""
