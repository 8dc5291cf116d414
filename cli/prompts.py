def ask(prompt):
    return input(prompt).strip()


__all__ = ["ask"]
