from __future__ import annotations

import logging

import pandas as pd
import requests

from city_core.loaders.data_io import Source, read_csv_resource

logger = logging.getLogger(__name__)

EVENT_COLUMNS = ["date", "value", "event"]


def _empty() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "date": pd.Series(dtype="datetime64[ns]"),
            "value": pd.Series(dtype="float64"),
            "event": pd.Series(dtype="object"),
        }
    )


def parse_event_rows(frame: pd.DataFrame) -> pd.DataFrame:
    """
    Dated value series with optional event annotations.
    Returns columns date, value, event (blank when absent), sorted by date.
    """
    if "date" not in frame.columns or "value" not in frame.columns:
        raise KeyError("events CSV needs 'date' and 'value' columns")

    raw_date = frame["date"].astype(str).str.strip()
    dates = pd.to_datetime(raw_date.where(raw_date != ""), errors="coerce", format="mixed")
    values = pd.to_numeric(frame["value"].astype(str).str.strip(), errors="coerce")
    events = frame["event"].astype(str) if "event" in frame.columns else pd.Series("", index=frame.index)

    keep = []
    for i in range(len(frame)):
        row_no = i + 2
        if not raw_date.iat[i]:
            logger.error("Missing date in row %d: %s", row_no, frame.iloc[i].to_dict())
            continue
        if pd.isna(dates.iat[i]):
            logger.error("Invalid date in row %d: %r", row_no, raw_date.iat[i])
            continue
        if pd.isna(values.iat[i]):
            logger.warning("Dropping row %d: non-numeric value %r", row_no, frame["value"].iat[i])
            continue
        keep.append(i)

    if not keep:
        return _empty()

    out = pd.DataFrame(
        {
            "date": dates.iloc[keep].to_numpy(),
            "value": values.iloc[keep].astype(float).to_numpy(),
            "event": events.iloc[keep].fillna("").to_numpy(),
        }
    )
    return out.sort_values("date", kind="stable").reset_index(drop=True)


def major_events(df: pd.DataFrame) -> pd.DataFrame:
    """Rows carrying a non-blank event description."""
    if df is None or df.empty:
        return _empty()
    mask = df["event"].fillna("").astype(str).str.strip() != ""
    return df.loc[mask].reset_index(drop=True)


def load_event_series(source: Source) -> pd.DataFrame:
    try:
        df = parse_event_rows(read_csv_resource(source))
    except (OSError, UnicodeDecodeError, requests.RequestException, pd.errors.ParserError, pd.errors.EmptyDataError, KeyError):
        logger.error("Failed to load event series from %s", source, exc_info=True)
        return _empty()
    logger.info("Loaded %d dated rows (%d events)", len(df), len(major_events(df)))
    return df
