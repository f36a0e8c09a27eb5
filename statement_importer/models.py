"""
Data models for imported transactions.

Records are frozen once built by an extractor; results and store snapshots
only ever copy them.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class FileType(str, Enum):
    """Input format detected from a file name or MIME hint."""
    EXCEL = "excel"
    PDF = "pdf"
    UNKNOWN = "unknown"


class TransactionRecord(BaseModel):
    """A single imported transaction."""
    model_config = ConfigDict(frozen=True)

    date: str
    description: str
    amount: float
    category: Optional[str] = None
    account: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Wire shape; category and account are left out when absent."""
        return self.model_dump(exclude_none=True)

    def __repr__(self) -> str:
        return f"TransactionRecord(date={self.date}, desc={self.description[:30]}, amount={self.amount:+.2f})"


class ImportMetadata(BaseModel):
    """Bookkeeping attached to every import result."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    imported_at: str = Field(alias="importedAt")
    file_size: Optional[int] = Field(default=None, alias="fileSize")
    file_type: FileType = Field(default=FileType.UNKNOWN, alias="fileType")
    content_type: Optional[str] = Field(default=None, alias="contentType")


class TransactionImportResult(BaseModel):
    """Output bundle of one import call."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    transactions: tuple[TransactionRecord, ...] = ()
    source_name: str = Field(alias="sourceName")
    metadata: ImportMetadata

    def to_dict(self) -> dict[str, Any]:
        return {
            "transactions": [txn.to_dict() for txn in self.transactions],
            "sourceName": self.source_name,
            "metadata": self.metadata.model_dump(by_alias=True, exclude_none=True, mode="json"),
        }
