import logging
import math
from typing import Iterable, List, Optional, Sequence

from gocyclo.models import ExclusionFlags, Measurement, ResultSet
from gocyclo.services.extraction import build_measurements
from gocyclo.services.go_parser import GoParser, get_go_parser
from gocyclo.services.walker import collect_files

logger = logging.getLogger(__name__)


class ResultCache:
    """
    Holds the most recent ResultSet and the flags that produced it.

    The key is the flag pair alone: asking again with the same flags returns
    the stored set even if the paths differ. Not safe to share across threads.
    """

    def __init__(self):
        self._result: Optional[ResultSet] = None

    def get(self, flags: ExclusionFlags) -> Optional[ResultSet]:
        if self._result is None or self._result.flags != flags:
            return None
        return self._result

    def put(self, flags: ExclusionFlags, result: ResultSet) -> None:
        if result.flags != flags:
            raise ValueError("result set was built with different exclusion flags")
        self._result = result

    def clear(self) -> None:
        self._result = None


def analyze(paths: Iterable[str], flags: ExclusionFlags, parser: Optional[GoParser] = None) -> ResultSet:
    """
    Run a full analysis over `paths` without consulting any cache.

    Any syntax or traversal error propagates and no result is produced.
    """
    parser = parser or get_go_parser()
    files = collect_files(paths, flags)
    logger.info(f"Analyzing {len(files)} Go files")

    measurements: List[Measurement] = []
    for file_path in files:
        measurements.extend(build_measurements(parser.parse_file(file_path)))

    return ResultSet(flags=flags, measurements=tuple(measurements))


def get_result_set(
    paths: Sequence[str],
    skip_godeps: bool,
    skip_vendor: bool,
    cache: ResultCache,
    parser: Optional[GoParser] = None,
) -> ResultSet:
    flags = ExclusionFlags(skip_godeps=skip_godeps, skip_vendor=skip_vendor)
    cached = cache.get(flags)
    if cached is not None:
        logger.debug(f"Reusing cached analysis for {flags}")
        return cached

    result = analyze(paths, flags, parser)
    cache.put(flags, result)
    return result


def average(measurements: Sequence[Measurement]) -> float:
    """Mean complexity, or nan when there are no measurements."""
    if not measurements:
        return math.nan
    return sum(m.complexity for m in measurements) / len(measurements)


def compute_measurements(
    paths: Sequence[str],
    skip_godeps: bool,
    skip_vendor: bool,
    cache: Optional[ResultCache] = None,
) -> List[Measurement]:
    """
    Measure every function under `paths`, most complex first.

    Pass the same `cache` across calls to reuse the previous result while the
    exclusion flags stay the same.
    """
    result = get_result_set(paths, skip_godeps, skip_vendor, cache or ResultCache())
    return result.sorted_measurements()


def compute_average(
    paths: Sequence[str],
    skip_godeps: bool,
    skip_vendor: bool,
    cache: Optional[ResultCache] = None,
) -> float:
    result = get_result_set(paths, skip_godeps, skip_vendor, cache or ResultCache())
    return average(result.measurements)


class ComplexityAnalyzer:
    """Owns a parser and a result cache for repeated queries."""

    def __init__(self, parser: Optional[GoParser] = None):
        self.parser = parser or get_go_parser()
        self.cache = ResultCache()

    def result_set(self, paths: Sequence[str], skip_godeps: bool = False, skip_vendor: bool = False) -> ResultSet:
        return get_result_set(paths, skip_godeps, skip_vendor, self.cache, self.parser)

    def measurements(self, paths: Sequence[str], skip_godeps: bool = False, skip_vendor: bool = False) -> List[Measurement]:
        return self.result_set(paths, skip_godeps, skip_vendor).sorted_measurements()

    def average(self, paths: Sequence[str], skip_godeps: bool = False, skip_vendor: bool = False) -> float:
        return average(self.result_set(paths, skip_godeps, skip_vendor).measurements)

    def invalidate(self) -> None:
        self.cache.clear()
