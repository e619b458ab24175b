"""
m6A Site Prediction

Command-line entry point: score a table of candidate sites with a
pre-trained classifier and write the table back with predicted m6A
probability and status.

Usage:
    m6a-predict --model rf_fit.joblib --input sites.csv --output predictions.csv
    m6a-predict --model rf_fit.joblib --example --threshold 0.6
    m6a-predict --model rf_fit.joblib --input sites.tsv --sep '\\t' --config prediction.yaml
"""

import argparse
import sys
from typing import List, Optional

import yaml

from .data_loaders import ModelLoader, SampleTableLoader
from .exceptions import M6APredictionError
from .models import M6APredictor
from .utils.config import load_config
from .utils.logging_utils import setup_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="m6a-predict",
        description="Predict m6A modification sites from site features",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument(
        "--model",
        required=True,
        help="Path to the joblib model artifact"
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--input",
        help="Sample table with the required feature columns"
    )
    source.add_argument(
        "--example",
        action="store_true",
        help="Score the example table bundled with the package"
    )
    parser.add_argument(
        "--output",
        help="Where to write predictions (default: stdout)"
    )
    parser.add_argument(
        "--sep",
        default=",",
        help="Field delimiter of input and output tables (default: ',')"
    )
    parser.add_argument(
        "--threshold",
        type=float,
        default=None,
        help="Probability above which a site is called Positive"
    )
    parser.add_argument(
        "--permissive",
        action="store_true",
        help="Encode unrecognized categories as missing instead of failing"
    )
    parser.add_argument(
        "--config",
        help="YAML configuration file"
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: from config, INFO)"
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write logs to this file"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    sep = "\t" if args.sep in ("\\t", "tab") else args.sep

    try:
        config = load_config(args.config)
        logger = setup_logger(
            "m6a_prediction",
            level=args.log_level or config.logging_params["level"],
            log_file=args.log_file or config.logging_params["log_file"]
        )
    except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
        setup_logger("m6a_prediction").error(f"Invalid configuration: {e}")
        return 1

    if args.permissive:
        config.prediction_params["strict"] = False

    try:
        threshold = config.positive_threshold if args.threshold is None else args.threshold
        classifier, schema = ModelLoader(config).load_bundle(args.model)

        samples = SampleTableLoader(config)
        if args.example:
            feature_df = samples.load_example()
        else:
            feature_df = samples.load(args.input, sep=sep)

        predictor = M6APredictor(
            classifier,
            schema=schema,
            positive_threshold=threshold,
            strict=config.strict,
            positive_label=config.prediction_params["positive_label"],
            negative_label=config.prediction_params["negative_label"]
        )
        predictions = predictor.predict(feature_df)

        if args.output:
            samples.save(predictions, args.output, sep=sep)
        else:
            predictions.to_csv(sys.stdout, sep=sep, index=False)

    except (M6APredictionError, OSError, ValueError, TypeError) as e:
        logger.error(f"Prediction failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
