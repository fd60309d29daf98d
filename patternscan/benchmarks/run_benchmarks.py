import sys
import argparse
from typing import List, Optional
from patternscan.benchmarks.benchmark import Benchmark, MIN_RUNS
from patternscan.config.config import DEFAULT_CONFIG_FILE, Config, ConfigError


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Time exact pattern counts over text files",
        epilog="The CSV file should not previously exist; runs should be >= 32 for stable means.",
    )
    parser.add_argument("output", nargs="?", default=None,
                        help="Name of the CSV file written under the output directory")
    parser.add_argument("runs", nargs="?", default=None,
                        help=f"Number of runs per test case (at least {MIN_RUNS})")
    parser.add_argument("--config", default=DEFAULT_CONFIG_FILE,
                        help="Path to the benchmark configuration file")
    parser.add_argument("--engine", choices=sorted(Config.VALID_ENGINES), default=None,
                        help="Override the configured search engine")
    parser.add_argument("--generate", type=int, default=0, metavar="LINES",
                        help="Generate a random text of LINES lines when no files are configured")
    parser.add_argument("--no-plot", action="store_true",
                        help="Skip the timing plot")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    try:
        config = Config(args.config)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    logger = config.logger
    engine = args.engine or config.engine
    try:
        runs = int(args.runs) if args.runs is not None else config.runs
    except ValueError:
        print(f"<RUNS> must be an integer, got: '{args.runs}'", file=sys.stderr)
        print("Usage: patternscan-bench [output] [runs] [--config FILE]", file=sys.stderr)
        return 1
    output = args.output or config.output
    if runs < MIN_RUNS:
        print(f"<RUNS> must be at least {MIN_RUNS}.", file=sys.stderr)
        return 1

    engine_kwargs = {"reread_on_query": config.reread_on_query}
    if engine == "rabinkarp":
        engine_kwargs.update(base=config.base, prime=config.modulus)

    benchmark = Benchmark(config.output_dir, engine=engine, engine_kwargs=engine_kwargs, logger=logger)

    files = list(config.files)
    if not files:
        if args.generate <= 0:
            print("No text files configured; set BENCHMARK.FILES or pass --generate LINES.", file=sys.stderr)
            return 1
        files.append(benchmark.generate_test_file(args.generate, f"bench_{args.generate}.txt"))

    logger.info(f"Running benchmarks with {config}")
    print("\033[0;36mRunning tests...\033[0m\n")
    try:
        benchmark.run_benchmark(files=files, patterns=config.patterns, runs=runs)
        csv_path = benchmark.generate_report(output, plot=config.plot and not args.no_plot)
    except (ValueError, OSError, RuntimeError) as e:
        logger.error(f"Benchmark failed: {e}")
        return 1

    print("\033[1;32mDone!\033[0m")
    print(f"Benchmark results saved to {csv_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
