from contextlib import contextmanager
from contextvars import ContextVar

import numpy as np


__all__ = ["get_dtype", "with_precision"]

_table_dtype: ContextVar[np.typing.DTypeLike] = ContextVar(
    "_table_dtype", default=np.float64
)


def get_dtype() -> np.typing.DTypeLike:
    """
    Get the floating point data type that newly built tables cache their arrays in.

    `lookup_array` results are returned in the dtype a table was built with.
    """
    return _table_dtype.get()


@contextmanager
def with_precision(dtype: np.typing.DTypeLike):
    """
    Build tables with a different array precision inside the context.

    Example:
    ```python
    with with_precision(np.float32):
        table = OneDLookupTable(breakpoints=readings_mv, values=pressures_kpa)
    ```

    :param dtype: Floating point dtype for tables built within the context.
    """
    token = _table_dtype.set(dtype)
    try:
        yield
    finally:
        _table_dtype.reset(token)
