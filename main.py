#!/usr/bin/env python3
"""
Invoice Field Engine - Main Entry Point.

This is the main entry point for the invoice field engine. It provides
both a command-line interface and programmatic access to the
extraction and validation pipeline.

Usage:
    Command Line:
        python main.py --input invoice.txt
        python main.py --input ./invoices/ --output results.json

    Python:
        from main import run_extraction
        results = run_extraction("invoice.pdf")

Author: ML Engineering Team
Version: 1.0.0
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

# Import project modules
from config import ConfigurationManager
from invoice_engine.utils.logger import ROOT_LOGGER_NAME, setup_logger_from_config, get_logger
from invoice_engine.utils.helpers import ensure_directory
from invoice_engine.utils.exceptions import InputError, InvoiceExtractionError


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        argv: Argument list, defaults to sys.argv.

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        description="Invoice Field Engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    Process single invoice:
        python main.py --input invoice.txt

    Process directory into a file:
        python main.py --input ./invoices/ --output results.json
        """
    )

    # Input/Output arguments
    parser.add_argument(
        "--input", "-i",
        type=str,
        required=True,
        help="Input file or directory containing invoices"
    )

    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Output JSON file (default: stdout)"
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to custom configuration file"
    )

    # Logging options
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only log warnings and errors"
    )

    return parser.parse_args(argv)


def initialize_system(args: argparse.Namespace) -> ConfigurationManager:
    """
    Initialize the engine with configuration and logging.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Initialized configuration manager.
    """
    config = ConfigurationManager(args.config)

    logger = setup_logger_from_config()

    if args.debug:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    else:
        level = None

    if level is not None:
        package_logger = logging.getLogger(ROOT_LOGGER_NAME)
        package_logger.setLevel(level)
        for handler in package_logger.handlers:
            handler.setLevel(level)

    logger.info("=" * 60)
    logger.info("INVOICE FIELD ENGINE")
    logger.info("=" * 60)
    logger.info(f"Version: {config.get('project.version', '1.0.0')}")
    logger.info(f"Input: {args.input}")
    logger.info(f"Output: {args.output or 'stdout'}")

    return config


def collect_inputs(input_path: str) -> List[Path]:
    """
    Resolve the input argument to a list of files.

    Args:
        input_path: File or directory path.

    Returns:
        List of files to process.

    Raises:
        DocumentNotFoundError: If the input path doesn't exist.
    """
    from invoice_engine.input_handler import InputHandler
    from invoice_engine.utils.exceptions import DocumentNotFoundError

    path = Path(input_path)
    if not path.exists():
        raise DocumentNotFoundError(str(path))

    if path.is_dir():
        return InputHandler().collect_files(path)
    return [path]


def run_extraction(input_path: str) -> List[Dict[str, Any]]:
    """
    Run the extraction and validation pipeline.

    Documents that cannot be loaded are logged and skipped.

    Args:
        input_path: Path to input file or directory.

    Returns:
        List of {"file", "invoice", "validation"} dictionaries.

    Example:
        >>> results = run_extraction("invoices/")
        >>> for r in results:
        ...     print(r['validation']['suggested_action'])
    """
    logger = get_logger(__name__)

    from invoice_engine.input_handler import InputHandler
    from invoice_engine.extraction import InvoiceExtractor
    from invoice_engine.postprocessor import ValidationPolicy

    input_handler = InputHandler()
    extractor = InvoiceExtractor()
    policy = ValidationPolicy()

    files_to_process = collect_inputs(input_path)
    logger.info(f"Processing {len(files_to_process)} files...")

    results = []
    for file_path in files_to_process:
        try:
            document = input_handler.load(file_path)
            invoice = extractor.extract(document.text, document.origin)
        except InvoiceExtractionError as e:
            logger.error(f"Skipping {file_path.name}: {e}")
            continue

        verdict = policy.validate(invoice)

        number = invoice.invoice_number.value if invoice.invoice_number else 'N/A'
        logger.info(
            f"  {document.filename}: Invoice #{number}, "
            f"confidence: {invoice.overall_confidence:.2f}, "
            f"action: {verdict.suggested_action.value}"
        )

        results.append({
            "file": document.filename,
            "invoice": invoice.to_dict(),
            "validation": verdict.to_dict()
        })

    return results


def write_results(results: List[Dict[str, Any]], output_path: Optional[str]) -> None:
    """
    Write results as a JSON array to a file or stdout.

    Args:
        results: Output of run_extraction().
        output_path: Destination file, or None for stdout.
    """
    payload = json.dumps(results, indent=2, ensure_ascii=False)

    if output_path is None:
        sys.stdout.write(payload + "\n")
        return

    output_p = Path(output_path)
    ensure_directory(output_p.parent)
    output_p.write_text(payload + "\n", encoding="utf-8")
    get_logger(__name__).info(f"Results written to: {output_p}")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function - entry point for command-line execution.

    Args:
        argv: Argument list, defaults to sys.argv.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    args = parse_arguments(argv)

    try:
        initialize_system(args)
        logger = get_logger(__name__)

        results = run_extraction(args.input)
        write_results(results, args.output)

        logger.info("=" * 60)
        logger.info(f"Extraction complete. Processed {len(results)} documents.")
        logger.info("=" * 60)

        return 0

    except (InputError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled by user", file=sys.stderr)
        return 130

    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        if args.debug:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
