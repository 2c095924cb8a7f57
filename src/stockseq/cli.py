"""CLI for turning a multi-symbol price CSV into a saved sequence dataset."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import List, Optional

from stockseq.config import PipelineConfig, get_settings
from stockseq.exceptions import DatasetError
from stockseq.features.packs import save_dataset_pack
from stockseq.loader import StockDataLoader
from stockseq.utils.logger import close_file_handlers, setup_logger

logger = setup_logger("stockseq.cli")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Align, normalize and window a Date,Symbol,Open,Close CSV."
    )
    parser.add_argument("csv", help="Path to the price CSV file.")
    parser.add_argument("--config", help="YAML config with a 'dataset' section.")
    parser.add_argument("--sequence-length", type=int, help="Window length in trading days.")
    parser.add_argument("--horizon", type=int, help="Number of future days to label.")
    parser.add_argument("--split-ratio", type=float, help="Fraction of samples used for training.")
    parser.add_argument(
        "--output-dir",
        help="Directory for the .npz pack (defaults to DATA_PROCESSED_DIR/sequences).",
    )
    parser.add_argument("--basename", help="File name (without suffix) for the .npz pack.")
    parser.add_argument("--summary-output", help="Optional path to save the JSON summary.")
    parser.add_argument("--log-file", action="store_true", help="Also write logs under LOGS_DIR.")
    return parser.parse_args(argv)


def resolve_config(args: argparse.Namespace) -> PipelineConfig:
    config = PipelineConfig.from_settings()
    if args.config:
        config = PipelineConfig.from_yaml(args.config, defaults=config)
    return PipelineConfig(
        sequence_length=args.sequence_length if args.sequence_length is not None else config.sequence_length,
        horizon=args.horizon if args.horizon is not None else config.horizon,
        split_ratio=args.split_ratio if args.split_ratio is not None else config.split_ratio,
    )


def dump_json(path: Path, payload: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    package_logger = None
    try:
        settings = get_settings()
        package_logger = setup_logger(
            "stockseq",
            level=settings.log_level,
            log_dir=settings.logs_dir if args.log_file else None,
        )
        config = resolve_config(args)
        loader = StockDataLoader.from_config(config)
        info = loader.load_file(args.csv)
        with loader.prepare_dataset() as dataset:
            pack_path = save_dataset_pack(dataset, basename=args.basename, out_dir=args.output_dir)
            summary = {
                "symbols": list(info.symbols),
                "calendar_length": len(info.dates),
                "sequence_length": dataset.sequence_length,
                "horizon": dataset.horizon,
                "feature_count": dataset.feature_count,
                "train_samples": dataset.train_count,
                "test_samples": dataset.test_count,
                "X_train_shape": list(dataset.X_train.shape),
                "y_train_shape": list(dataset.y_train.shape),
                "X_test_shape": list(dataset.X_test.shape),
                "y_test_shape": list(dataset.y_test.shape),
                "first_test_date": dataset.test_dates[0],
                "pack": str(pack_path),
            }
    except FileNotFoundError as exc:
        raise SystemExit(str(exc)) from exc
    except DatasetError as exc:
        logger.error("Dataset preparation failed", extra={"error": str(exc)})
        raise SystemExit(f"{type(exc).__name__}: {exc}") from exc
    finally:
        if package_logger is not None:
            close_file_handlers(package_logger)

    print(json.dumps(summary, indent=2))
    if args.summary_output:
        dump_json(Path(args.summary_output), summary)


if __name__ == "__main__":
    main()
