import math
from pathlib import Path
from typing import List, Optional, Tuple

from fastapi import APIRouter, HTTPException, Query

from gocyclo.errors import GoSyntaxError, TraversalError
from gocyclo.models import AverageResponse, Measurement, ResultSet
from gocyclo.services import analysis
from gocyclo.services.report import select_stats

router = APIRouter(prefix="/api/analysis", tags=["analysis"])

ROOT_PATH = Path.cwd()

# A single live cache, tied to the path list it was built for. The cache
# itself only remembers the last flag pair.
_cache = analysis.ResultCache()
_cache_paths: Optional[Tuple[str, ...]] = None


def _resolve_paths(path: Optional[List[str]]) -> Tuple[str, ...]:
    if not path:
        return (str(ROOT_PATH.resolve()),)

    for p in path:
        if not Path(p).exists():
            raise HTTPException(status_code=404, detail=f"Path not found: {p}")
    # Different spellings of one directory share a cache entry.
    return tuple(str(Path(p).resolve()) for p in path)


def _result_set(paths: Tuple[str, ...], skip_godeps: bool, skip_vendor: bool) -> ResultSet:
    global _cache_paths
    if paths != _cache_paths:
        _cache.clear()
        _cache_paths = paths
    try:
        return analysis.get_result_set(paths, skip_godeps, skip_vendor, _cache)
    except GoSyntaxError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except TraversalError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/functions", response_model=List[Measurement])
async def get_functions(
    path: Optional[List[str]] = Query(None, description="File or directory to analyze; may repeat"),
    skip_godeps: bool = False,
    skip_vendor: bool = False,
    top: int = Query(-1, description="Return at most this many functions (negative: all)"),
    over: int = Query(0, description="Only return functions with complexity above this"),
):
    """
    Per-function complexity, most complex first.
    """
    paths = _resolve_paths(path)
    stats = _result_set(paths, skip_godeps, skip_vendor).sorted_measurements()
    return select_stats(stats, top=top, over=over)


@router.get("/average", response_model=AverageResponse)
async def get_average(
    path: Optional[List[str]] = Query(None),
    skip_godeps: bool = False,
    skip_vendor: bool = False,
):
    paths = _resolve_paths(path)
    result = _result_set(paths, skip_godeps, skip_vendor)

    value = analysis.average(result.measurements)
    return AverageResponse(
        average=None if math.isnan(value) else value,
        function_count=len(result.measurements),
    )


@router.post("/refresh")
async def refresh_analysis():
    """
    Drop the cached result so the next request re-scans.
    """
    global _cache_paths
    had_result = _cache_paths is not None
    _cache.clear()
    _cache_paths = None
    return {"dropped": int(had_result)}
