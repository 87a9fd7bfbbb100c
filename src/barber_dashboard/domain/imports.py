"""Domain models for bulk sale imports."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ImportPreviewItem:
    """A parsed spreadsheet row awaiting confirmation."""

    id: str
    date: str
    price: float
    service_name: str
    service_index: int
    count: int
    client_name: str = "Sin nombre"
    tip: float = 0.0


@dataclass
class ImportPreview:
    """Result of parsing import rows."""

    items: list[ImportPreviewItem]
    error: str | None = None
