"""Entry point for streaming history statistics"""
import json
import logging
import os
import sys
import traceback

from unwrapped_stats.config import Settings, settings
from unwrapped_stats.services.analyzer import StreamingHistoryAnalyzer
from unwrapped_stats.services.ingestion import load_streaming_history

logger = logging.getLogger(__name__)

def run(config: Settings = settings) -> None:
    """Summarize every export file found in INPUT_DIR and write the result to OUTPUT_DIR."""
    try:
        logging.basicConfig(level=config.LOG_LEVEL.upper(), format='%(message)s')

        # Log config
        logger.info("Using configuration:")
        logger.info(json.dumps(config.model_dump(), indent=2))

        events = load_streaming_history(config.INPUT_DIR)

        analyzer = StreamingHistoryAnalyzer(events, tz=config.tzinfo)
        analyzer.select_year(config.YEAR)
        summary = analyzer.summary
        if summary is None:
            logger.warning(f"No plays found for year {analyzer.year}. Available years: {analyzer.available_years}")

        # Save results
        os.makedirs(config.OUTPUT_DIR, exist_ok=True)
        output_path = os.path.join(config.OUTPUT_DIR, config.OUTPUT_FILENAME)
        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(summary.to_json_dict() if summary else None, f, indent=2, ensure_ascii=False)

        logger.info(f"Summary written to {output_path}")

    except Exception as e:
        logger.error(f"Error while summarizing streaming history: {e}")
        traceback.print_exc()
        sys.exit(1)

if __name__ == "__main__":
    run()
