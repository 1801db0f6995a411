class ConfigValidationError(ValueError):
    """Catalog or crawl-policy invariant violation. Fatal for a generation pass."""

    def __init__(self, problems: list[str] | str):
        if isinstance(problems, str):
            problems = [problems]
        self.problems = list(problems)
        super().__init__("; ".join(self.problems))
