"""Move-resolution services.

Pure orchestration over domain models: validation, the deterministic
heuristic, prompt construction and the resolver that ties them together.
"""
