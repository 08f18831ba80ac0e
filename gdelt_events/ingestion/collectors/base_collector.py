"""Abstract base class for all data source collectors.

Raw (Bronze) data contract:
- Preserve all source fields (no transformation)
- Add `source` column
- UTF-8 encoding
- File naming: {source}_{dataset}_{YYYYMMDD}.csv
"""

from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path

import pandas as pd

from gdelt_events.shared.utils import setup_logger


class BaseCollector(ABC):
    """Base class for all data collectors.

    Subclasses must define:
        SOURCE_NAME (str): identifier used in file naming (e.g. "gdelt_events").

    Subclasses must implement:
        collect(): fetch all datasets from the source.
        health_check(): verify the source is reachable.

    The export_csv() method handles raw CSV naming automatically.
    """

    SOURCE_NAME: str

    def __init__(
        self,
        output_dir: Path,
        log_file: Path | None = None,
        log_level: int | str = "INFO",
    ) -> None:
        """Initialize the collector.

        Args:
            output_dir: Directory for raw CSV exports (created on first export).
            log_file: Optional path for file-based logging.
            log_level: Logger level name or constant.
        """
        self.output_dir = output_dir
        self.logger = setup_logger(self.__class__.__name__, log_file, level=log_level)

    @abstractmethod
    def collect(self) -> dict[str, pd.DataFrame]:
        """Collect all datasets from the source.

        Returns:
            Mapping of dataset name to DataFrame.
        """
        ...

    @abstractmethod
    def health_check(self) -> bool:
        """Verify the data source is reachable and responding.

        Returns:
            True if the source is available, False otherwise.
        """
        ...

    def export_csv(self, df: pd.DataFrame, dataset_name: str) -> Path:
        """Export a DataFrame to raw CSV.

        File path: {output_dir}/{SOURCE_NAME}_{dataset_name}_{YYYYMMDD}.csv

        Args:
            df: DataFrame to export.
            dataset_name: Dataset identifier (e.g. "events").

        Returns:
            Path to the written file.

        Raises:
            ValueError: If the DataFrame is empty.
        """
        if df.empty:
            raise ValueError(f"Cannot export empty DataFrame for '{dataset_name}'")

        self.output_dir.mkdir(parents=True, exist_ok=True)
        date_str = datetime.now().strftime("%Y%m%d")
        path = self.output_dir / f"{self.SOURCE_NAME}_{dataset_name}_{date_str}.csv"
        df.to_csv(path, index=False, encoding="utf-8")
        self.logger.info("Exported %d records to %s", len(df), path)
        return path
