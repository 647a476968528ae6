"""
Core compilation pipeline: path resolution, closure assembly, virtual imports,
theme functions, backend arbitration and single-use sessions.
"""
