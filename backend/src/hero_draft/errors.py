"""Exceptions raised by the catalog and recommendation layers."""


class CatalogError(Exception):
    """Base class for catalog loading failures."""


class SourceUnavailable(CatalogError):
    """A catalog table or file could not be read at all."""

    def __init__(self, table: str, location: str, reason: str = ""):
        self.table = table
        self.location = location
        self.reason = reason
        message = f"Catalog source '{table}' unavailable at {location}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class MalformedRow(CatalogError):
    """A single row is missing a required field.

    Raised while parsing one row and caught by the loader, which skips the
    row and keeps going.
    """

    def __init__(self, table: str, row_number: int, reason: str):
        self.table = table
        self.row_number = row_number
        self.reason = reason
        super().__init__(f"{table} row {row_number}: {reason}")


class HeroNotFoundError(LookupError):
    """The selected hero name is not in the hero catalog."""

    def __init__(self, hero_name: str):
        self.hero_name = hero_name
        super().__init__(f"Hero not found: {hero_name}")
