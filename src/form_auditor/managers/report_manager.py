import logging
from pathlib import Path
from typing import Union

import pandas as pd

from form_auditor.model import AuditReport

logger = logging.getLogger(__name__)

EXPORT_FORMATS = (".csv", ".json", ".xlsx")


class ReportManager:
    """
    Writes audit reports to disk. The format follows the file extension.
    """

    def to_dataframe(self, report: AuditReport) -> pd.DataFrame:
        return pd.DataFrame(report.to_rows(), columns=["Source", "Group", "Check", "Title", "Status", "Message"])

    def export(self, report: AuditReport, path: Union[str, Path]) -> Path:
        """
        Exports one row per check result.

        Raises:
            ValueError: If the extension is not one of .csv, .json, .xlsx.
        """
        out_path = Path(path)
        suffix = out_path.suffix.lower()
        if suffix not in EXPORT_FORMATS:
            raise ValueError(f"Unsupported export format '{suffix}' (use one of {', '.join(EXPORT_FORMATS)})")

        out_path.parent.mkdir(parents=True, exist_ok=True)
        df = self.to_dataframe(report)

        if suffix == ".csv":
            df.to_csv(out_path, index=False)
        elif suffix == ".json":
            df.to_json(out_path, orient="records", indent=2)
        else:
            df.to_excel(out_path, index=False)

        logger.info("Exported %d results to %s", len(df), out_path)
        return out_path
