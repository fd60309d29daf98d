import os
import sys
import time
import random
import string
import logging
import tracemalloc
from typing import Any, Callable, Dict, List, Optional, TextIO, Tuple
import pandas as pd
import psutil
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from patternscan.search.algorithms import ALGORITHMS
from patternscan.search.base import SearchAlgorithm
from patternscan.benchmarks.progress import display_progress

MIN_RUNS = 4
RESULT_COLUMNS = ["engine", "file", "pattern", "pattern_length", "count", "size", "t_mean"]


class Benchmark:
    """
    Times repeated pattern counts over a set of text files.

    Each case pairs one file with one pattern; the files and patterns lists are
    cycled independently so that both a text-length experiment (several files,
    one pattern each) and a pattern-length experiment (one file, several
    patterns) can be described with the same call.

    Args:
        output_dir (str): Directory receiving generated texts and reports.
        engine (str): Key into ALGORITHMS. Defaults to "rabinkarp".
        engine_kwargs (dict, optional): Extra constructor arguments for the engine.
        logger (logging.Logger, optional): Defaults to the "PatternScan" logger.
        progress_stream (TextIO, optional): Where the progress bar is drawn.
    """
    def __init__(self, output_dir: str = "benchmark_results", engine: str = "rabinkarp",
                 engine_kwargs: Optional[Dict[str, Any]] = None,
                 logger: Optional[logging.Logger] = None,
                 progress_stream: TextIO = sys.stdout) -> None:
        if engine not in ALGORITHMS:
            raise ValueError(f"Unknown engine '{engine}'. Valid options: {', '.join(sorted(ALGORITHMS))}")
        self.output_dir = output_dir
        self.engine = engine
        self.engine_kwargs = engine_kwargs or {}
        self.logger = logger or logging.getLogger("PatternScan")
        self.progress_stream = progress_stream
        self.results: List[Dict[str, Any]] = []
        self.file_stats: Dict[str, Dict[str, float]] = {}
        os.makedirs(output_dir, exist_ok=True)

    def generate_test_file(self, size: int, filename: str) -> str:
        filepath = os.path.join(self.output_dir, filename)
        with open(filepath, 'w') as f:
            for _ in range(size):
                line_length = random.randint(20, 100)
                line = ''.join(random.choices(string.ascii_letters + string.digits + ' ', k=line_length))
                f.write(line + '\n')
        return filepath

    def measure_memory(self, func: Callable, *args) -> Tuple[Any, float]:
        """Run `func(*args)` and return its result with the peak traced memory in kB."""
        tracemalloc.start()
        try:
            result = func(*args)
            _, peak = tracemalloc.get_traced_memory()
        finally:
            tracemalloc.stop()
        return result, peak / 1024

    def _build_engine(self, path: str) -> SearchAlgorithm:
        engine = ALGORITHMS[self.engine](path, **self.engine_kwargs)
        # Engines that reread on query skip loading in their constructor
        if engine.reread_on_query:
            engine.load()
        return engine

    def _load_engine(self, path: str) -> SearchAlgorithm:
        self.logger.debug(f"Building {self.engine} engine over {path}")
        engine, peak_kb = self.measure_memory(self._build_engine, path)
        self.file_stats[path] = {
            "build_memory_kb": peak_kb,
            "rss_kb": psutil.Process().memory_info().rss / 1024,
            "text_bytes": len(engine.text),
        }
        return engine

    def run_benchmark(self, files: List[str], patterns: List[str], runs: int) -> List[Dict[str, Any]]:
        """
        Time `runs` counts of every (file, pattern) case.

        Args:
            files (List[str]): Text files; cycled over the cases.
            patterns (List[str]): Patterns; cycled over the cases.
            runs (int): Timed repetitions per case, at least 4.

        Returns:
            List[Dict]: One row per case with the columns of RESULT_COLUMNS;
            `t_mean` is the mean time of one count in nanoseconds.

        Raises:
            ValueError: If runs < 4 or files or patterns is empty.
        """
        if runs < MIN_RUNS:
            raise ValueError(f"Runs must be at least {MIN_RUNS}, got: {runs}")
        if not files:
            raise ValueError("At least one text file is required")
        if not patterns:
            raise ValueError("At least one pattern is required")

        self.results.clear()
        self.file_stats.clear()
        cases = max(len(files), len(patterns))
        total_runs = runs * cases
        executed_runs = 0
        engines: Dict[str, SearchAlgorithm] = {}

        for case in range(cases):
            path = files[case % len(files)]
            pattern = patterns[case % len(patterns)]
            if path not in engines:
                engines[path] = self._load_engine(path)
            engine = engines[path]
            self.logger.info(f"Case {case + 1}/{cases}: '{pattern}' in {path}")

            total_time = 0
            count = 0
            for _ in range(runs):
                executed_runs += 1
                display_progress(executed_runs, total_runs, self.progress_stream)
                begin = time.perf_counter_ns()
                count = engine.count(pattern)
                total_time += time.perf_counter_ns() - begin

            self.results.append({
                "engine": self.engine,
                "file": os.path.splitext(os.path.basename(path))[0],
                "pattern": pattern,
                "pattern_length": len(pattern.encode("utf-8")),
                "count": count,
                "size": engine.size_in_bytes(),
                "t_mean": total_time / runs,
            })

        self.progress_stream.write("\n\n")
        self.logger.info(f"Benchmark completed: {cases} cases, {total_runs} runs")
        return self.results

    def plot_figure(self, data, x, y, xlabel, ylabel, filename, log_scale_x=False, log_scale_y=False):
        plt.figure(figsize=(15, 10))
        df = pd.DataFrame(data)
        for label in df["file"].unique():
            file_data = df[df["file"] == label].sort_values(x)
            plt.plot(file_data[x], file_data[y], marker='o', label=label)
        if log_scale_x:
            plt.xscale('log')
        if log_scale_y:
            plt.yscale('log')
        plt.xlabel(xlabel + " [Log Scale]" if log_scale_x else xlabel)
        plt.ylabel(ylabel + " [Log Scale]" if log_scale_y else ylabel)
        plt.legend()
        plt.tight_layout()
        plt.savefig(filename)
        plt.close()

    def generate_report(self, csv_name: str = "benchmark_results.csv", plot: bool = True) -> str:
        """
        Write the CSV results, a text summary and, optionally, a timing plot.

        Returns:
            str: Path of the CSV file.

        Raises:
            ValueError: If no benchmark has been run.
        """
        if not self.results:
            raise ValueError("No benchmark results to report")

        df = pd.DataFrame(self.results, columns=RESULT_COLUMNS)
        csv_path = os.path.join(self.output_dir, csv_name)
        df.to_csv(csv_path, index=False)
        self.logger.info(f"Results written to {csv_path}")

        if plot:
            self.plot_figure(
                data=df,
                x="pattern_length",
                y="t_mean",
                xlabel="Pattern Length (bytes)",
                ylabel="Mean Count Time (ns)",
                filename=os.path.join(self.output_dir, f"{self.engine}-time.png"),
                log_scale_y=True
            )

        with open(os.path.join(self.output_dir, "benchmark_report.txt"), 'w') as f:
            f.write(f"Benchmark Summary ({self.engine})\n")
            f.write("==================\n\n")
            f.write(f"{'File':<20}{'Pattern Length':<16}{'Matches':<12}{'Mean Time (ns)':<20}\n")
            f.write("=" * 68 + "\n")
            for row in df.to_dict("records"):
                f.write(f"{row['file']:<20}{row['pattern_length']:<16}{row['count']:<12}{row['t_mean']:<20.1f}\n")
            f.write("\n")
            f.write(f"{'Text':<40}{'Bytes':<14}{'Build Memory (kB)':<20}{'RSS (kB)':<14}\n")
            f.write("=" * 88 + "\n")
            for path, stats in self.file_stats.items():
                f.write(f"{os.path.basename(path):<40}{stats['text_bytes']:<14}"
                        f"{stats['build_memory_kb']:<20.1f}{stats['rss_kb']:<14.0f}\n")
        return csv_path
