"""Result models for catalog operations."""

from pydantic import BaseModel, Field

from autokatalog.models.vehicle import Vehicle


class ParseResult(BaseModel):
    """Outcome of parsing one CSV file.

    ``errors`` holds one ``"Row <n>: ..."`` entry per rejected row; rejected
    rows are absent from ``records``.
    """

    records: list[Vehicle] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


class ImportResult(BaseModel):
    """Outcome of a bulk import into the record store."""

    added: int = 0
    failed: int = 0  # rows that parsed but could not be stored
    skipped: int = 0  # rows outside the requested tab
    errors: list[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True when the file passed validation and was committed."""
        return not self.errors

    @property
    def summary(self) -> str:
        if self.errors:
            return f"Import blocked: {len(self.errors)} invalid row(s)"
        parts = [f"{self.added} added"]
        if self.skipped:
            parts.append(f"{self.skipped} skipped")
        if self.failed:
            parts.append(f"{self.failed} failed")
        return ", ".join(parts)
