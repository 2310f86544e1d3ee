"""Routing — a lazily built tree of handlers walked one segment at a time.

Literal path children are tried before predicate children; method
handlers on the node reached after the last segment answer the request.
"""
