"""
Runtime support: the state graph that owns a configuration's representations,
and read-only export of its transitions.
"""
