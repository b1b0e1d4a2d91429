import logging
from abc import ABC, abstractmethod
from typing import Any
import pandas as pd

logger = logging.getLogger(__name__)


class DataPipeline(ABC):
    """
    Abstract base class for export pipelines.
    Follows an Extract -> Transform -> Load (ETL) pattern.
    """

    def __init__(self, report_type: str, test_mode: bool = False):
        self.report_type = report_type
        self.test_mode = test_mode

    def run(self) -> bool:
        """
        Orchestrates the pipeline execution.
        Extraction errors propagate; nothing is written unless transform succeeds.
        """
        logger.info(f"🚀 STEP: {self.report_type.upper()} EXPORT")
        logger.info("-" * 30)

        # --- 1. EXTRACT ---
        raw_data = self.extract()

        # --- 2. TRANSFORM ---
        result = self.transform(raw_data)
        if result is None:
            logger.error(f"❌ Transformation failed for {self.report_type}. Nothing written.")
            return False

        # --- 3. LOAD ---
        self.load(result)

        logger.info(f"✅ {self.report_type.capitalize()} Pipeline Finished.\n")
        logger.info("=" * 60)
        return True

    @abstractmethod
    def extract(self) -> pd.DataFrame:
        """
        Reads the raw source rows. Should raise when the source can't be read.
        """
        pass

    @abstractmethod
    def transform(self, df: pd.DataFrame) -> Any | None:
        """
        Validates and reshapes the raw rows. Returns None when validation fails.
        """
        pass

    @abstractmethod
    def load(self, result: Any):
        """
        Writes the outputs.
        """
        pass
