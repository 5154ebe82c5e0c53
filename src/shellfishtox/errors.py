class ShellfishToxError(Exception):
    pass


class SchemaMismatchError(ShellfishToxError, ValueError):
    """Input no longer matches the layout the pipeline was written against."""


class UnmappedUnitError(ShellfishToxError, ValueError):
    def __init__(self, counts: dict[str, int]):
        self.counts = dict(counts)
        listing = ", ".join(f"{unit!r} ({n} rows)" for unit, n in self.counts.items())
        super().__init__(f"Unit labels missing from the conversion table: {listing}")


class MetadataMismatchError(ShellfishToxError, ValueError):
    def __init__(self, undocumented: list[str], stale: list[str]):
        self.undocumented = list(undocumented)
        self.stale = list(stale)
        super().__init__(
            f"Column descriptions out of sync with output columns. "
            f"Undocumented: {self.undocumented}. Described but absent: {self.stale}."
        )
