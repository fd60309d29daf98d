from patternscan.benchmarks.benchmark import Benchmark
from patternscan.benchmarks.progress import display_progress

__all__ = ["Benchmark", "display_progress"]
