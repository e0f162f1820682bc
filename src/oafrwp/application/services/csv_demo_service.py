"""Append-and-read service behind the CSV demo routes."""

from __future__ import annotations

import asyncio
import csv
import os
from pathlib import Path

FIXED_ROW: tuple[str, ...] = tuple(str(value) for value in range(1, 16))


class CsvFormatError(ValueError):
    """Raised when a data row does not match the header column count."""

    def __init__(self, *, record_number: int, expected: int, actual: int) -> None:
        super().__init__(
            f"invalid record length on record {record_number}: "
            f"expected {expected} columns, got {actual}"
        )
        self.record_number = record_number
        self.expected = expected
        self.actual = actual


class CsvDemoService:
    """Append a fixed row to one CSV file and read it back as header-keyed records."""

    def __init__(self, *, csv_path: Path) -> None:
        self._csv_path = csv_path

    @property
    def csv_path(self) -> Path:
        return self._csv_path

    async def append_fixed_row(self) -> None:
        """Append `1,...,15` plus the platform line separator."""

        await asyncio.to_thread(self._append_fixed_row_sync)

    async def read_records(self) -> list[dict[str, str]]:
        """Return data rows keyed by header column, skipping empty lines."""

        return await asyncio.to_thread(self._read_records_sync)

    def _append_fixed_row_sync(self) -> None:
        with self._csv_path.open("a", encoding="utf-8", newline="") as handle:
            writer = csv.writer(handle, lineterminator=os.linesep)
            writer.writerow(FIXED_ROW)

    def _read_records_sync(self) -> list[dict[str, str]]:
        with self._csv_path.open("r", encoding="utf-8", newline="") as handle:
            reader = csv.reader(handle)
            rows = [row for row in reader if row]

        if not rows:
            return []

        header, *data_rows = rows
        records: list[dict[str, str]] = []
        for index, row in enumerate(data_rows, start=2):
            if len(row) != len(header):
                raise CsvFormatError(
                    record_number=index,
                    expected=len(header),
                    actual=len(row),
                )
            records.append(dict(zip(header, row, strict=True)))
        return records
