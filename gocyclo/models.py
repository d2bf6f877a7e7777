from typing import List, Optional, Tuple

from pydantic import BaseModel, Field


class Position(BaseModel):
    filename: str
    line: int
    column: int

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"


class Measurement(BaseModel):
    package_name: str
    # "Name" for functions, "(T).Name" or "(*T).Name" for methods
    function_name: str
    complexity: int = Field(ge=1)
    position: Position

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return f"{self.complexity} {self.package_name} {self.function_name} {self.position}"


class ExclusionFlags(BaseModel):
    skip_godeps: bool = False
    skip_vendor: bool = False

    model_config = {"frozen": True}


class ResultSet(BaseModel):
    """
    Every measurement produced by one analysis run, in root-then-declaration
    order, together with the flags that produced it.
    """

    flags: ExclusionFlags
    measurements: Tuple[Measurement, ...] = ()

    model_config = {"frozen": True}

    def sorted_measurements(self) -> List[Measurement]:
        # sorted() is stable, so ties keep their discovery order.
        return sorted(self.measurements, key=lambda m: m.complexity, reverse=True)


class AverageResponse(BaseModel):
    # None when no functions were found (the average is undefined).
    average: Optional[float] = None
    function_count: int = 0
