# data/exporter.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Sequence

import pandas as pd

from shift_roster.data import data_manager
from shift_roster.models.roster import Roster
from shift_roster.models.worker import Worker
from shift_roster.utils.date_helper import day_labels, month_key

logger = logging.getLogger(__name__)

NAME_HEADER = "Name"


def roster_rows(roster: Roster, workers: Sequence[Worker]) -> List[List[str]]:
    """헤더 1행 + 직원당 1행. 열은 일자(1..N), 값은 셀 코드(빈 칸은 "")."""
    rows = [[NAME_HEADER, *day_labels(roster.year, roster.month)]]
    for w in workers:
        if w.id not in roster.cells:
            continue
        rows.append([w.name, *roster.row(w.id)])
    return rows


def roster_dataframe(roster: Roster, workers: Sequence[Worker]) -> pd.DataFrame:
    header, *body = roster_rows(roster, workers)
    return pd.DataFrame(body, columns=header)


def default_export_path(roster: Roster) -> Path:
    return data_manager.DATA_DIR / "exports" / f"roster_{month_key(roster.year, roster.month)}.csv"


def export_csv(roster: Roster, workers: Sequence[Worker], path: Optional[Path] = None) -> Path:
    path = Path(path) if path is not None else default_export_path(roster)
    path.parent.mkdir(parents=True, exist_ok=True)
    # 엑셀에서 한글/일본어가 깨지지 않도록 BOM 포함
    roster_dataframe(roster, workers).to_csv(path, index=False, encoding="utf-8-sig")
    logger.info("배정표 CSV 저장: %s", path)
    return path
