_REGISTRY = {}


def register_rule(heading, counts_as_evidence=True):
    def decorator(func):
        _REGISTRY[heading] = func
        func.heading = heading
        func.counts_as_evidence = counts_as_evidence
        return func

    return decorator


def list_rules():
    return list(_REGISTRY.values())


__all__ = ["register_rule", "list_rules"]
