# The registry of level set builders
LEVEL_SET_REGISTRY = {}

def register_level_set(kind: str):
    def deco(func):
        LEVEL_SET_REGISTRY[kind] = func
        return func
    return deco

def get_level_set_builder(kind: str):
    if kind not in LEVEL_SET_REGISTRY:
        raise KeyError(f"Unknown level set '{kind}'. Available: {', '.join(sorted(LEVEL_SET_REGISTRY))}")
    return LEVEL_SET_REGISTRY[kind]
