#!/usr/bin/env python3
"""Run the analysis engine over a snapshot JSON file and print the report."""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import argparse
import json
from wealthlens.config import settings
from wealthlens.engine.analyzer import analyze_portfolio
from wealthlens.engine.market_data import NeutralMarketData, StaticMarketData
from wealthlens.errors import InvalidInputError
from wealthlens.logging import setup_logging


def main():
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("snapshot", help="Path to a snapshot JSON file (see samples/snapshot.json)")
    parser.add_argument("--market-data", default=settings.market_data_path, help="Classification table JSON (betas, market_caps, fund_ratings)")
    parser.add_argument("--generated-at", default=None, help="Fixed report timestamp, for reproducible output")
    parser.add_argument("--out", default=None, help="Write the report here instead of stdout")
    parser.add_argument("--log-level", default=None, help="Overrides LOG_LEVEL; logs go to stderr")
    args = parser.parse_args()

    setup_logging(args.log_level, stream=sys.stderr)
    with open(args.snapshot, "r", encoding="utf-8") as f:
        raw = json.load(f)
    market_data = StaticMarketData.from_json_file(args.market_data) if args.market_data else NeutralMarketData()
    try:
        report = analyze_portfolio(
            raw,
            config=settings.analysis_config(),
            market_data=market_data,
            generated_at=args.generated_at,
        )
    except InvalidInputError as e:
        print(f"Invalid snapshot: {e}", file=sys.stderr)
        return 2

    payload = report.model_dump(mode="json", by_alias=True)
    text = json.dumps(payload, indent=2, ensure_ascii=False)
    if args.out:
        with open(args.out, "w", encoding="utf-8") as f:
            f.write(text + "\n")
        print(f"✓ Wrote {args.out} ({len(payload['insights'])} insights)")
    else:
        print(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
