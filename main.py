import logging
import sys

from order_export.logger import setup_logger
from order_export.pipelines.order_history import OrderHistoryPipeline

logger = logging.getLogger(__name__)


def run_process(test_mode: bool = False) -> int:
    """Main orchestration function: Amazon order history -> inventory feed + tracking sheet."""
    setup_logger()
    logger.info("--- Starting Order History Export ---")

    try:
        succeeded = OrderHistoryPipeline(test_mode=test_mode).run()
    except (OSError, ValueError) as e:
        # Covers missing/unreadable exports and malformed CSVs.
        logger.error(f"❌ Could not read the order history: {e}")
        return 1

    if not succeeded:
        return 1

    logger.info("\n--- Process Finished Successfully ---")
    return 0


if __name__ == "__main__":
    sys.exit(run_process(test_mode="--test" in sys.argv[1:]))
