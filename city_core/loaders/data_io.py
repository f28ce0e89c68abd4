from __future__ import annotations

import io
from pathlib import Path
from typing import Union

import pandas as pd
import requests

Source = Union[str, Path]


def is_url(source: Source) -> bool:
    return isinstance(source, str) and source.lower().startswith(("http://", "https://"))


def read_csv_resource(source: Source, *, timeout: int = 60) -> pd.DataFrame:
    """
    Read a CSV from a local path or an http(s) URL.
    Every column comes back as text; row parsers own the type conversion.
    Raises on fetch/parse failures (requests.RequestException, OSError, pandas errors).
    """
    if is_url(source):
        r = requests.get(str(source), timeout=timeout)
        r.raise_for_status()
        buf = io.StringIO(r.text)
        return pd.read_csv(buf, dtype=str, keep_default_na=False, skipinitialspace=True)
    return pd.read_csv(source, dtype=str, keep_default_na=False, skipinitialspace=True)
